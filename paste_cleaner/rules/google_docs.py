"""Rule for fragments copied out of Google Docs.

Docs wraps the whole selection in a ``<b id="docs-internal-guid-...">``
with ``font-weight:normal``, spells every run's formatting out in inline
styles and brackets the clipboard payload with fragment comments.
"""

import re

from ..utils.styles import ALLOWED_PROPERTIES, rewrite_style_attributes
from .base import PlatformRule, compile_patterns

PATTERNS = compile_patterns(
    r'id="docs-internal-[^"]*"',
    r'<b\b[^>]*\sid="[^"]*"[^>]*>',
    r'<span[^>]*style="[^"]*font-family:[^"]*Google Sans[^"]*"',
    r'<meta[^>]*charset="utf-8"[^>]*>',
    r"<!--StartFragment-->",
    r"<!--EndFragment-->",
)

BRAND_FONT = "google sans"

_FRAGMENT_COMMENT_RE = re.compile(r"<!--(?:Start|End)Fragment-->", re.IGNORECASE)
_META_CHARSET_RE = re.compile(r'<meta[^>]*charset="utf-8"[^>]*>', re.IGNORECASE)
_INTERNAL_ID_RE = re.compile(r'\s*(?<![\w-])id="docs-internal-[^"]*"', re.IGNORECASE)
_ID_ATTR_RE = re.compile(r'\s+id="[^"]*"', re.IGNORECASE)
_DIR_ATTR_RE = re.compile(r'\s+dir="[^"]*"', re.IGNORECASE)
_BOLD_OPEN_RE = re.compile(r"<b\b[^>]*>\s*", re.IGNORECASE)
_BOLD_CLOSE_RE = re.compile(r"\s*</b\s*>", re.IGNORECASE)


def _is_brand_font(declaration: str) -> bool:
    return declaration.startswith("font-family:") and BRAND_FONT in declaration


def clean(html: str) -> str:
    cleaned = _FRAGMENT_COMMENT_RE.sub("", html)
    cleaned = _META_CHARSET_RE.sub("", cleaned)

    cleaned = _INTERNAL_ID_RE.sub("", cleaned)
    cleaned = _ID_ATTR_RE.sub("", cleaned)
    cleaned = _DIR_ATTR_RE.sub("", cleaned)

    # The export always wraps everything in a redundant bold tag
    cleaned = _BOLD_OPEN_RE.sub("", cleaned)
    cleaned = _BOLD_CLOSE_RE.sub("", cleaned)

    return rewrite_style_attributes(
        cleaned, allowed=ALLOWED_PROPERTIES, also_remove=_is_brand_font
    )


RULE = PlatformRule(
    name="google-docs",
    patterns=PATTERNS,
    transform=clean,
    description="Google Docs GUID wrappers, fragment comments and run styles",
)
