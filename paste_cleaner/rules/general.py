"""Catch-all rule applied to every fragment.

Runs last. Besides filtering leftover vendor styles it performs the
security stripping (comments, scripts, style sheets), so it is marked
``always_apply`` and cannot be disabled.
"""

import re

from ..utils.styles import GENERAL_ALLOWED_PROPERTIES, rewrite_style_attributes
from .base import PlatformRule, compile_patterns

PATTERNS = compile_patterns(
    r'style="[^"]*mso-[^"]*"',
    r'style="[^"]*webkit-[^"]*"',
    r"<!--.*?-->",
    r"<script[^>]*>.*?</script>",
    r"<style[^>]*>.*?</style>",
)

_FLAGS = re.IGNORECASE | re.DOTALL

_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_COMMENT_MARKER_RE = re.compile(r"<!--|-->")
_SCRIPT_BLOCK_RE = re.compile(r"<script\b[^>]*>.*?</script\s*>", _FLAGS)
_STYLE_BLOCK_RE = re.compile(r"<style\b[^>]*>.*?</style\s*>", _FLAGS)
# Unbalanced leftovers of the two blocks above
_STRAY_BLOCK_TAG_RE = re.compile(r"</?(?:script|style)\b[^>]*>?", re.IGNORECASE)
_EMPTY_ATTR_RE = re.compile(r'\s*(?<![\w-])(?:class|id|style)="\s*"', re.IGNORECASE)

_START_TAG_RE = re.compile(r"<[a-zA-Z][^<>]*>")
_TAG_WHITESPACE_RE = re.compile(r'("[^"]*"|\'[^\']*\')|\s+')
_TAG_END_RE = re.compile(r"\s+(/?>)$")
_BETWEEN_TAGS_RE = re.compile(r">\s+<")


def _tidy_tag(match: re.Match) -> str:
    tag = _TAG_WHITESPACE_RE.sub(lambda m: m.group(1) or " ", match.group(0))
    return _TAG_END_RE.sub(r"\1", tag)


def _clean_once(html: str) -> str:
    cleaned = rewrite_style_attributes(html, allowed=GENERAL_ALLOWED_PROPERTIES)

    cleaned = _COMMENT_RE.sub("", cleaned)
    cleaned = _COMMENT_MARKER_RE.sub("", cleaned)

    cleaned = _SCRIPT_BLOCK_RE.sub("", cleaned)
    cleaned = _STYLE_BLOCK_RE.sub("", cleaned)
    cleaned = _STRAY_BLOCK_TAG_RE.sub("", cleaned)

    cleaned = _EMPTY_ATTR_RE.sub("", cleaned)
    cleaned = _START_TAG_RE.sub(_tidy_tag, cleaned)

    cleaned = _BETWEEN_TAGS_RE.sub("><", cleaned)
    return cleaned.strip()


def clean(html: str) -> str:
    # A removal can splice its neighbours into a new marker or tag
    # ("<scr<script>ipt>"), so repeat until nothing changes
    cleaned = _clean_once(html)
    while True:
        again = _clean_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again


RULE = PlatformRule(
    name="general",
    patterns=PATTERNS,
    transform=clean,
    always_apply=True,
    description="Vendor styles, comments, scripts and style sheets from any source",
)
