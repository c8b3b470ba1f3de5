"""Rule for Confluence storage-format markup.

``ac:`` (macros) and ``ri:`` (resource identifiers) elements carry page
metadata rather than the text the user selected, so they are removed
together with their content.
"""

import re

from .base import PlatformRule, compile_patterns

PATTERNS = compile_patterns(
    r"<ac:[^>]*>",
    r"<ri:[^>]*>",
    r'class="confluence-[^"]*"',
)

_FLAGS = re.IGNORECASE | re.DOTALL

_SELF_CLOSING_RE = re.compile(r"<(?:ac|ri):[\w-]+\b[^>]*/>", re.IGNORECASE)
# Same-name pairs only; nested elements of the same name are not supported
_PAIRED_RE = re.compile(r"<(ac|ri):([\w-]+)\b[^>]*>.*?</\1:\2\s*>", _FLAGS)
_STRAY_TAG_RE = re.compile(r"</?(?:ac|ri):[^>]*>", re.IGNORECASE)
_CLASS_RE = re.compile(r'\s*(?<![\w-])class="confluence-[^"]*"', re.IGNORECASE)


def clean(html: str) -> str:
    cleaned = _SELF_CLOSING_RE.sub("", html)

    # Removing an inner pair can expose the outer one
    count = 1
    while count:
        cleaned, count = _PAIRED_RE.subn("", cleaned)

    cleaned = _STRAY_TAG_RE.sub("", cleaned)
    return _CLASS_RE.sub("", cleaned)


RULE = PlatformRule(
    name="confluence",
    patterns=PATTERNS,
    transform=clean,
    description="Confluence ac:/ri: metadata elements and page-link classes",
)
