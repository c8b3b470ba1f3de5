"""HTML to Markdown conversion for cleaned fragments.

This is a one-shot sequence of textual substitutions, not a parser.
Known limitations:

- nested or overlapping tags of the same kind (``<b><b>x</b></b>``,
  lists inside lists) are not converted correctly
- markup that was entity-escaped in the HTML (``&lt;b&gt;``) ends up as
  literal text once entities are decoded
"""

import html as html_lib
import re

from ..logger import get_logger

logger = get_logger(__name__)

_FLAGS = re.IGNORECASE | re.DOTALL

_PRE_RE = re.compile(r"<pre\b[^>]*>(.*?)</pre\s*>", _FLAGS)
_CODE_TAG_RE = re.compile(r"</?code\b[^>]*>", re.IGNORECASE)
_HEADING_RE = re.compile(r"<h([1-6])\b[^>]*>(.*?)</h\1\s*>", _FLAGS)

# (pattern, replacement) pairs applied in order after headings
SUBSTITUTIONS: list[tuple[re.Pattern, str]] = [
    # Bold
    (re.compile(r"<strong\b[^>]*>(.*?)</strong\s*>", _FLAGS), r"**\1**"),
    (re.compile(r"<b\b[^>]*>(.*?)</b\s*>", _FLAGS), r"**\1**"),
    # Italic
    (re.compile(r"<em\b[^>]*>(.*?)</em\s*>", _FLAGS), r"*\1*"),
    (re.compile(r"<i\b[^>]*>(.*?)</i\s*>", _FLAGS), r"*\1*"),
    # Links
    (re.compile(r'<a\b[^>]*href="([^"]*)"[^>]*>(.*?)</a\s*>', _FLAGS), r"[\2](\1)"),
    # Lists
    (re.compile(r"<li\b[^>]*>(.*?)</li\s*>", _FLAGS), "- \\1\n"),
    (re.compile(r"<(?:ul|ol)\b[^>]*>", re.IGNORECASE), ""),
    (re.compile(r"</(?:ul|ol)\s*>", re.IGNORECASE), "\n"),
    # Paragraphs and line breaks
    (re.compile(r"<p\b[^>]*>(.*?)</p\s*>", _FLAGS), "\\1\n\n"),
    (re.compile(r"<br\b[^>]*>", re.IGNORECASE), "\n"),
    # Inline code
    (re.compile(r"<code\b[^>]*>(.*?)</code\s*>", _FLAGS), r"`\1`"),
]

_TAG_RE = re.compile(r"<[^>]+>")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def _fence(match: re.Match) -> str:
    # Code inside a preformatted block is fenced, not backticked
    body = _CODE_TAG_RE.sub("", match.group(1))
    return f"```\n{body}\n```\n"


def _heading(match: re.Match) -> str:
    level, text = match.groups()
    return f"{'#' * int(level)} {text}\n\n"


def html_to_markdown(html: str) -> str:
    """
    Convert a cleaned HTML fragment to Markdown.

    Args:
        html: Cleaned HTML fragment.

    Returns:
        Markdown text without any HTML tags, with at most one blank line
        between blocks and no surrounding whitespace.

    Example:
        >>> html_to_markdown("<h1>Title</h1><p><strong>Bold</strong></p>")
        '# Title\\n\\n**Bold**'
    """
    if not html:
        return ""

    markdown = _PRE_RE.sub(_fence, html)
    markdown = _HEADING_RE.sub(_heading, markdown)
    for pattern, replacement in SUBSTITUTIONS:
        markdown = pattern.sub(replacement, markdown)

    markdown = _TAG_RE.sub("", markdown)

    markdown = markdown.replace("&nbsp;", " ")
    markdown = html_lib.unescape(markdown)

    markdown = _BLANK_LINES_RE.sub("\n\n", markdown).strip()

    logger.debug(f"Converted {len(html)} chars of HTML to {len(markdown)} chars of Markdown")
    return markdown
