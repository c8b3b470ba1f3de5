"""Rule for Microsoft Word (and Outlook) HTML exports."""

import re

from .base import PlatformRule, compile_patterns

PATTERNS = compile_patterns(
    r"<o:p>",
    r"</o:p>",
    r'xmlns:o="[^"]*"',
    r"<w:[^>]*>",
    r"<!--\[if[^\]]*\]>",
    r"<!\[endif\]-->",
    r"<!\[if[^\]]*\]>",
    r'class="Mso[^"]*"',
)

_FLAGS = re.IGNORECASE | re.DOTALL

_OFFICE_PARAGRAPH_RE = re.compile(r"<o:p\b[^>]*>.*?</o:p>", _FLAGS)
_OFFICE_TAG_RE = re.compile(r"</?o:\w+[^>]*>", re.IGNORECASE)
_WORD_TAG_RE = re.compile(r"</?w:[^>]*>", re.IGNORECASE)
_NAMESPACE_ATTR_RE = re.compile(r'\s*\bxmlns:\w+="[^"]*"', re.IGNORECASE)
_CONDITIONAL_COMMENT_RE = re.compile(r"<!--\[if[^\]]*\]>.*?<!\[endif\]-->", _FLAGS)
_DOWNLEVEL_BLOCK_RE = re.compile(r"<!\[if[^\]]*\]>.*?<!\[endif\]>", _FLAGS)
_MSO_CLASS_RE = re.compile(r'\s*(?<![\w-])class="Mso[^"]*"', re.IGNORECASE)


def clean(html: str) -> str:
    cleaned = _CONDITIONAL_COMMENT_RE.sub("", html)
    cleaned = _DOWNLEVEL_BLOCK_RE.sub("", cleaned)

    cleaned = _OFFICE_PARAGRAPH_RE.sub("", cleaned)
    cleaned = _OFFICE_TAG_RE.sub("", cleaned)
    cleaned = _WORD_TAG_RE.sub("", cleaned)

    cleaned = _NAMESPACE_ATTR_RE.sub("", cleaned)
    cleaned = _MSO_CLASS_RE.sub("", cleaned)
    return cleaned


RULE = PlatformRule(
    name="microsoft-word",
    patterns=PATTERNS,
    transform=clean,
    description="Office namespace elements, conditional comments and Mso classes",
)
