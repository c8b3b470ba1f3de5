"""Entry point that turns pasted content into a cleaned fragment.

Cleaning runs in one of two modes. Rule-based is the default. AI-assisted
is used only when asked for, and drops back to rule-based, with a warning
as the only trace, whenever the AI call fails for any reason.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .ai import AIError, TextGenerator, clean_with_ai
from .config import OUTPUT_FORMATS, CleanerConfig
from .generators.markdown import html_to_markdown
from .logger import get_logger
from .pipeline import apply_rules
from .rules import RuleRegistry
from .utils.clipboard import extract_html, is_event_like

logger = get_logger(__name__)


class InvalidInputKindError(TypeError):
    """Raised when the input is neither a string nor a paste event."""


class CleaningMode(Enum):
    RULE_BASED = "rule-based"
    AI_ASSISTED = "ai-assisted"


@dataclass(frozen=True)
class CleanOptions:
    """
    Per-call cleaning options.

    Attributes:
        format: "html" or "markdown".
        ai: None/False for rule-based only, True to use the credential from
            the environment, or the credential itself as a string.
    """

    format: str = "html"
    ai: bool | str | None = None

    def __post_init__(self):
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Invalid format '{self.format}'. Expected one of: {', '.join(OUTPUT_FORMATS)}"
            )

    @property
    def mode(self) -> CleaningMode:
        if self.ai is None or self.ai is False:
            return CleaningMode.RULE_BASED
        return CleaningMode.AI_ASSISTED


def _read_input(value: Any) -> str:
    if isinstance(value, str):
        return value
    if is_event_like(value):
        return extract_html(value)
    raise InvalidInputKindError(
        f"Input must be a string or a paste event, got {type(value).__name__}"
    )


async def clean_paste(
    value: Any,
    options: CleanOptions | None = None,
    *,
    registry: RuleRegistry | None = None,
    generator: TextGenerator | None = None,
    config: CleanerConfig | None = None,
) -> str:
    """
    Clean pasted content.

    Args:
        value: Raw HTML fragment, or a paste event exposing clipboard data.
        options: Output format and AI mode. Defaults to the configured
            format, rule-based.
        registry: Rules to apply. Defaults to the configured registry.
        generator: Text generator for AI mode. Defaults to Gemini.
        config: Cleaner configuration.

    Returns:
        The cleaned fragment as HTML or Markdown. Empty input gives "".

    Raises:
        InvalidInputKindError: If ``value`` is neither a string nor a paste
            event. AI failures are never raised.
    """
    fragment = _read_input(value)
    if not fragment or not fragment.strip():
        return ""

    config = config or CleanerConfig()
    options = options or CleanOptions(format=config.default_format)
    if registry is None:
        registry = config.build_registry()

    mode = options.mode
    logger.info(f"Cleaning {len(fragment)} chars ({mode.value})")

    if mode is CleaningMode.AI_ASSISTED:
        try:
            cleaned = await clean_with_ai(
                fragment, options.ai, generator=generator, config=config.ai
            )
        except AIError as e:
            logger.warning(f"AI cleaning failed, falling back to rule-based: {e}")
            cleaned = apply_rules(fragment, registry)
    else:
        cleaned = apply_rules(fragment, registry)

    if options.format == "markdown":
        return html_to_markdown(cleaned)
    return cleaned


def clean_paste_sync(
    value: Any,
    options: CleanOptions | None = None,
    **kwargs,
) -> str:
    """Blocking wrapper around :func:`clean_paste` for callers without an event loop."""
    return asyncio.run(clean_paste(value, options, **kwargs))
