"""Rule for Apple Pages (and WebKit-on-macOS) clipboard HTML."""

import re

from .base import PlatformRule, compile_patterns

PATTERNS = compile_patterns(
    r'<meta[^>]*name="Generator"[^>]*content="Pages[^"]*"',
    r'class="[^"]*Apple-[^"]*"',
    r'data-apple-[^"]*="[^"]*"',
)

_GENERATOR_META_RE = re.compile(
    r'<meta[^>]*name="Generator"[^>]*content="Pages[^"]*"[^>]*>', re.IGNORECASE
)
_APPLE_CLASS_RE = re.compile(r'\s*(?<![\w-])class="[^"]*Apple-[^"]*"', re.IGNORECASE)
_APPLE_DATA_RE = re.compile(r'\s*\bdata-apple-[^"=\s]*="[^"]*"', re.IGNORECASE)


def clean(html: str) -> str:
    cleaned = _GENERATOR_META_RE.sub("", html)
    cleaned = _APPLE_CLASS_RE.sub("", cleaned)
    return _APPLE_DATA_RE.sub("", cleaned)


RULE = PlatformRule(
    name="apple-pages",
    patterns=PATTERNS,
    transform=clean,
    description="Pages generator metadata, Apple-* classes and data-apple-* attributes",
)
