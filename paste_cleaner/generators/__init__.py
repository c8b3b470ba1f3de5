"""Output format generators."""

from .markdown import html_to_markdown

__all__ = ["html_to_markdown"]
