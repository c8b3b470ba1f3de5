"""Allow-list filtering of inline ``style`` attributes."""

import re
from collections.abc import Callable, Collection

# Properties that carry meaning a rich-text editor can render
ALLOWED_PROPERTIES = frozenset(
    {
        "color",
        "background-color",
        "font-weight",
        "font-style",
        "text-decoration",
        "font-size",
        "text-align",
    }
)

# The generic catch-all additionally lets font families through
GENERAL_ALLOWED_PROPERTIES = ALLOWED_PROPERTIES | {"font-family"}

# Substrings of a normalized declaration that mark it as exporter noise
LEAK_MARKERS = (
    "mso-",
    "webkit-",
    "font-variant:",
    "vertical-align:",
    "white-space:pre",
    "background-color:transparent",
    "font-family:arial,sans-serif",
    "font-family:arial",
)

_COLON_RE = re.compile(r"\s*:\s*")
_COMMA_RE = re.compile(r"\s*,\s*")

# Matches style="..." or style='...' together with the whitespace before it
_STYLE_ATTR_RE = re.compile(
    r"""(\s+)style\s*=\s*(["'])(.*?)\2""",
    re.IGNORECASE | re.DOTALL,
)

StylePredicate = Callable[[str], bool]


def _normalize(declaration: str) -> str:
    """Lower-case a declaration and drop whitespace around ':' and ','."""
    lowered = _COLON_RE.sub(":", declaration.lower())
    return _COMMA_RE.sub(",", lowered)


def is_leaking(declaration: str) -> bool:
    """Check whether a normalized declaration contains a leak marker."""
    return any(marker in declaration for marker in LEAK_MARKERS)


def filter_style(
    style: str | None,
    allowed: Collection[str] = ALLOWED_PROPERTIES,
    also_remove: StylePredicate | None = None,
) -> str:
    """
    Keep only allow-listed declarations of a ``style`` attribute value.

    Declarations are compared lower-cased with whitespace around ``:``
    removed, but the surviving ones are emitted with their original
    casing. The filter only subtracts: nothing absent from the input
    can appear in the output.

    Args:
        style: Raw attribute value, e.g. ``"color: red; mso-bidi: x"``.
        allowed: Property names that may survive.
        also_remove: Extra predicate receiving the normalized declaration;
            returning True drops it even if its property is allowed.

    Returns:
        The surviving declarations joined with ``;``, or an empty string
        when nothing survives (callers must then omit the attribute).
    """
    if not style:
        return ""

    kept = []
    for part in style.split(";"):
        declaration = part.strip()
        if not declaration or ":" not in declaration:
            continue

        normalized = _normalize(declaration)
        if is_leaking(normalized):
            continue
        if also_remove and also_remove(normalized):
            continue

        prop = normalized.split(":", 1)[0]
        if prop not in allowed:
            continue

        kept.append(declaration)

    return ";".join(kept)


def rewrite_style_attributes(
    html: str,
    allowed: Collection[str] = ALLOWED_PROPERTIES,
    also_remove: StylePredicate | None = None,
) -> str:
    """
    Run :func:`filter_style` over every ``style`` attribute of a fragment.

    Attributes left empty are removed together with their leading
    whitespace, so ``<span style="mso-x:1">`` becomes ``<span>``.
    """

    def _replace(match: re.Match) -> str:
        leading, quote, value = match.groups()
        filtered = filter_style(value, allowed=allowed, also_remove=also_remove)
        if not filtered:
            return ""
        return f"{leading}style={quote}{filtered}{quote}"

    return _STYLE_ATTR_RE.sub(_replace, html)
