"""Utility modules for the paste cleaner."""

from .clipboard import extract_html, is_event_like
from .styles import (
    ALLOWED_PROPERTIES,
    GENERAL_ALLOWED_PROPERTIES,
    filter_style,
    rewrite_style_attributes,
)

__all__ = [
    "ALLOWED_PROPERTIES",
    "GENERAL_ALLOWED_PROPERTIES",
    "extract_html",
    "filter_style",
    "is_event_like",
    "rewrite_style_attributes",
]
