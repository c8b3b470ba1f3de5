"""Rule for fragments copied out of Notion.

Notion wraps every block in ``<div class="notion-...">`` elements tagged
with ``data-block-id``/``data-token-index`` and leaves ``notionvc``
version comments around the selection. Colors and emphasis live in the
inline ``style`` of the wrapping spans, so those are filtered rather than
dropped.
"""

import re

from ..utils.styles import filter_style
from .base import PlatformRule, compile_patterns

PATTERNS = compile_patterns(
    r'<div[^>]*class="notion-[^"]*"',
    r'data-block-id="[^"]*"',
    r'<span[^>]*class="notion-[^"]*"',
    r'<[a-z][^>]*\sclass="[^"]*\bnotion-[^"]*"',
    r"<!--\s*notionvc:",
)

_VERSION_COMMENT_RE = re.compile(r"<!--\s*notionvc:.*?-->", re.IGNORECASE | re.DOTALL)
_FRAGMENT_COMMENT_RE = re.compile(r"<!--(?:Start|End)Fragment-->", re.IGNORECASE)

# <span ...> or <div ...> start tags, attributes captured
_WRAPPER_TAG_RE = re.compile(r"<(span|div)\b([^>]*)>", re.IGNORECASE)
_CLASS_ATTR_RE = re.compile(r'(?<![\w-])class="([^"]*)"', re.IGNORECASE)
_STYLE_ATTR_RE = re.compile(r'(?<![\w-])style="([^"]*)"', re.IGNORECASE)

# Vendor classes on any other element
_VENDOR_CLASS_ATTR_RE = re.compile(r'\s*(?<![\w-])class="[^"]*\bnotion[^"]*"', re.IGNORECASE)
_DATA_ATTR_RE = re.compile(
    r'\s*\bdata-(?:block-id|token-index|content-editable-leaf)="[^"]*"',
    re.IGNORECASE,
)
_EMPTY_DIV_RE = re.compile(r"<div>\s*</div>", re.IGNORECASE)


def _rebuild_wrapper(match: re.Match) -> str:
    tag, attrs = match.groups()

    class_match = _CLASS_ATTR_RE.search(attrs)
    if not class_match or "notion" not in class_match.group(1).lower():
        return match.group(0)

    style_match = _STYLE_ATTR_RE.search(attrs)
    style = filter_style(style_match.group(1)) if style_match else ""
    if style:
        return f'<{tag} style="{style}">'
    return f"<{tag}>"


def clean(html: str) -> str:
    cleaned = _VERSION_COMMENT_RE.sub("", html)
    cleaned = _FRAGMENT_COMMENT_RE.sub("", cleaned)

    # Vendor-classed wrappers lose every attribute except a filtered style
    cleaned = _WRAPPER_TAG_RE.sub(_rebuild_wrapper, cleaned)

    cleaned = _VENDOR_CLASS_ATTR_RE.sub("", cleaned)
    cleaned = _DATA_ATTR_RE.sub("", cleaned)

    # Nested wrappers empty out from the inside
    count = 1
    while count:
        cleaned, count = _EMPTY_DIV_RE.subn("", cleaned)

    return cleaned


RULE = PlatformRule(
    name="notion",
    patterns=PATTERNS,
    transform=clean,
    description="Notion block wrappers, data attributes and version comments",
)
