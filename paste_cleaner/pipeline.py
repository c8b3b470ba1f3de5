"""Rule-based cleaning pipeline.

Every rule of the registry is tested against the current working string
in order; a rule whose trigger fires replaces the working string with its
transform output. Rules are not exclusive, one fragment can trip several.
A whitespace normalization pass runs at the end.

Running the pipeline on its own output is a no-op.
"""

import re

from .logger import get_logger
from .rules import DEFAULT_REGISTRY, RuleRegistry

logger = get_logger(__name__)

# Text next to these tags is trimmed. Text next to an inline tag keeps one
# edge space ("<b>a</b> and"), but a whitespace-only gap between two tags
# is removed, so "<b>a</b> <i>b</i>" becomes "<b>a</b><i>b</i>".
BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "body",
        "br",
        "caption",
        "dd",
        "div",
        "dl",
        "dt",
        "figcaption",
        "figure",
        "footer",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "head",
        "header",
        "hr",
        "html",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
    }
)

_TAG_SPLIT_RE = re.compile(r"(<[^>]*>)")
_TAG_NAME_RE = re.compile(r"^</?\s*([a-zA-Z][\w:-]*)")
_WHITESPACE_RE = re.compile(r"\s+")
_BETWEEN_TAGS_RE = re.compile(r">\s+<")


def _is_block(token: str | None) -> bool:
    if token is None:
        return True  # fragment edge
    match = _TAG_NAME_RE.match(token)
    return bool(match) and match.group(1).lower() in BLOCK_TAGS


def normalize_whitespace(html: str) -> str:
    """
    Normalize whitespace in a fragment.

    - whitespace between two tags is removed
    - runs of whitespace in text collapse to a single space
    - text is trimmed against block-level tags and the fragment edges

    Example:
        >>> normalize_whitespace("<p>   Hello   World   </p>")
        '<p>Hello World</p>'
    """
    html = _BETWEEN_TAGS_RE.sub("><", html)
    tokens = [t for t in _TAG_SPLIT_RE.split(html) if t]

    out = []
    for i, token in enumerate(tokens):
        if token.startswith("<"):
            out.append(token)
            continue

        text = _WHITESPACE_RE.sub(" ", token)
        previous_tag = tokens[i - 1] if i > 0 else None
        next_tag = tokens[i + 1] if i + 1 < len(tokens) else None
        if _is_block(previous_tag):
            text = text.lstrip()
        if _is_block(next_tag):
            text = text.rstrip()
        if text.strip():
            out.append(text)

    return "".join(out).strip()


def detect_rules(html: str, registry: RuleRegistry = DEFAULT_REGISTRY) -> list[str]:
    """
    Names of the rules whose trigger patterns match ``html``.

    Only the raw fragment is inspected; rules that would fire because an
    earlier rule rewrote the fragment are not reported. Always-applied
    rules are listed only when a trigger matches.
    """
    return [rule.name for rule in registry if rule.triggered_by(html)]


def apply_rules(html: str, registry: RuleRegistry = DEFAULT_REGISTRY) -> str:
    """
    Clean a fragment with the rule registry.

    Args:
        html: Raw HTML fragment.
        registry: Ordered rules to apply.

    Returns:
        The cleaned fragment. Never raises for string input.
    """
    cleaned = html

    for rule in registry:
        if rule.matches(cleaned):
            logger.debug(f"Applying rule: {rule.name}")
            cleaned = rule.apply(cleaned)
        else:
            logger.debug(f"Rule not triggered: {rule.name}")

    return normalize_whitespace(cleaned)
