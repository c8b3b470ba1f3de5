"""Rule for HTML produced by PDF viewers and converters."""

import re

from .base import PlatformRule, compile_patterns

PATTERNS = compile_patterns(
    r'<link[^>]*type="application/pdf[^"]*"',
    r'<meta[^>]*name="PDF[^"]*"',
)

_LINK_RE = re.compile(r'<link[^>]*type="application/pdf[^"]*"[^>]*>', re.IGNORECASE)
_META_RE = re.compile(r'<meta[^>]*name="PDF[^"]*"[^>]*>', re.IGNORECASE)


def clean(html: str) -> str:
    return _META_RE.sub("", _LINK_RE.sub("", html))


RULE = PlatformRule(
    name="pdf",
    patterns=PATTERNS,
    transform=clean,
    description="PDF <link> and <meta> declarations",
)
