"""AI-assisted cleaning through a text-generation service.

The service is consumed as a :data:`TextGenerator`: an async callable
taking a credential and a prompt and returning generated text. The
default generator talks to the Gemini ``generateContent`` REST endpoint
through httpx, which is an optional dependency (``pip install
paste-cleaner[ai]``).

Every failure surfaces as an :class:`AIError` subclass so the dispatcher
can fall back to the rule-based pipeline.
"""

import re
from collections.abc import Awaitable, Callable

from .config import AIConfig
from .logger import get_logger

logger = get_logger(__name__)

TextGenerator = Callable[[str, str], Awaitable[str]]

PROMPT_TEMPLATE = """You are a paste cleaning expert. Clean this HTML content by:
1. Removing platform-specific attributes (Notion, Google Docs, Word, etc.)
2. Keeping only semantic HTML structure
3. Preserving formatting but removing inline styles and classes
4. Removing comments, scripts, and metadata
5. Normalizing whitespace
6. Returning only the cleaned HTML without explanations

HTML to clean:
{html}"""

# A response that is one fenced block, optionally tagged html/htm
_FENCE_RE = re.compile(r"^```(?:html?)?[ \t]*\n(.*?)\n?```$", re.IGNORECASE | re.DOTALL)
# A fenced block surrounded by chatter
_EMBEDDED_FENCE_RE = re.compile(r"```(?:html?)?[ \t]*\n(.*?)\n```", re.IGNORECASE | re.DOTALL)


class AIError(Exception):
    """Base class for failures of the AI-assisted path."""


class AIUnavailableError(AIError):
    """No credential could be resolved or the optional dependency is missing."""


class AIRequestFailedError(AIError):
    """The service call failed or returned something unusable."""


def build_prompt(html: str) -> str:
    return PROMPT_TEMPLATE.format(html=html)


def extract_html_payload(text: str) -> str:
    """
    Strip code fences wrapped around a generated fragment.

    Fences are peeled off repeatedly, so a fenced block nested in another
    yields the innermost payload.

    Raises:
        AIRequestFailedError: If nothing is left once fences are removed.
    """
    payload = (text or "").strip()
    while True:
        match = _FENCE_RE.match(payload) or _EMBEDDED_FENCE_RE.search(payload)
        if not match:
            break
        payload = match.group(1).strip()

    if not payload:
        raise AIRequestFailedError("AI response contained no HTML payload")
    return payload


class GeminiGenerator:
    """
    Text generator backed by the Gemini REST API.

    Usage::

        generator = GeminiGenerator(AIConfig(model="gemini-1.5-flash"))
        text = await generator(api_key, prompt)
    """

    def __init__(self, config: AIConfig | None = None, transport=None):
        """
        Args:
            config: Model, endpoint and timeout settings.
            transport: Optional httpx transport, used by tests.
        """
        self.config = config or AIConfig()
        self.transport = transport

    @property
    def url(self) -> str:
        return f"{self.config.endpoint}/models/{self.config.model}:generateContent"

    async def __call__(self, api_key: str, prompt: str) -> str:
        try:
            import httpx
        except ImportError as e:
            raise AIUnavailableError(
                "AI mode requires httpx. Install it with: pip install paste-cleaner[ai]"
            ) from e

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {"x-goog-api-key": api_key}

        client_kwargs = {"timeout": self.config.timeout}
        if self.transport is not None:
            client_kwargs["transport"] = self.transport

        logger.debug(f"POST {self.url}")
        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.post(self.url, json=body, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise AIRequestFailedError(f"HTTP {e.response.status_code} from AI service") from e
        except httpx.HTTPError as e:
            raise AIRequestFailedError(f"AI request failed: {e}") from e
        except ValueError as e:
            raise AIRequestFailedError(f"AI service returned invalid JSON: {e}") from e

        return self._extract_text(data)

    @staticmethod
    def _extract_text(data: dict) -> str:
        try:
            parts = data["candidates"][0]["content"]["parts"]
            return "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise AIRequestFailedError(f"Unexpected AI response shape: {e}") from e


def resolve_api_key(ai: bool | str | None, config: AIConfig) -> str:
    """
    Turn the ``ai`` option into a credential.

    Raises:
        AIUnavailableError: If no credential can be found.
    """
    if isinstance(ai, str):
        api_key = ai.strip() or None
    else:
        api_key = config.resolve_api_key()

    if not api_key:
        raise AIUnavailableError(
            f"AI mode requires the {config.api_key_env} environment variable "
            "or an API key passed as the ai option"
        )
    return api_key


async def clean_with_ai(
    html: str,
    ai: bool | str | None = True,
    generator: TextGenerator | None = None,
    config: AIConfig | None = None,
) -> str:
    """
    Clean a fragment with a text-generation service.

    Args:
        html: Raw HTML fragment.
        ai: True to read the credential from the environment, or the
            credential itself.
        generator: Text generator to call. Defaults to :class:`GeminiGenerator`.
        config: AI settings.

    Returns:
        The cleaned fragment extracted from the generated text.

    Raises:
        AIUnavailableError: No credential or missing dependency.
        AIRequestFailedError: Service failure or unusable response.
    """
    config = config or AIConfig()
    api_key = resolve_api_key(ai, config)
    generator = generator or GeminiGenerator(config)

    try:
        generated = await generator(api_key, build_prompt(html))
    except AIError:
        raise
    except Exception as e:
        raise AIRequestFailedError(f"AI cleaning failed: {e}") from e

    return extract_html_payload(generated)


def is_ai_available(config: AIConfig | None = None) -> bool:
    """Check whether a credential is set and the default generator can run."""
    config = config or AIConfig()
    if not config.resolve_api_key():
        return False
    try:
        import httpx  # noqa: F401
    except ImportError:
        return False
    return True
