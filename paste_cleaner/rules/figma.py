"""Rule for Figma SVG/markup exports."""

import re

from .base import PlatformRule, compile_patterns

PATTERNS = compile_patterns(
    r"<svg[^>]*data-figma",
    r'class="[^"]*figma[^"]*"',
)

_DATA_ATTR_RE = re.compile(r'\s*\bdata-figma[^"=\s]*="[^"]*"', re.IGNORECASE)
_CLASS_RE = re.compile(r'\s*(?<![\w-])class="[^"]*figma[^"]*"', re.IGNORECASE)


def clean(html: str) -> str:
    cleaned = _DATA_ATTR_RE.sub("", html)
    return _CLASS_RE.sub("", cleaned)


RULE = PlatformRule(
    name="figma",
    patterns=PATTERNS,
    transform=clean,
    description="Figma data attributes and classes",
)
