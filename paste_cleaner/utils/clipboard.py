"""Extraction of HTML from paste-event-like objects."""

import html
from typing import Any

HTML_MIME = "text/html"
TEXT_MIME = "text/plain"


def _reader(source: Any):
    """Return the ``get_data``/``getData`` bound method of ``source``, if any."""
    for attr in ("get_data", "getData"):
        method = getattr(source, attr, None)
        if callable(method):
            return method
    return None


def is_event_like(value: Any) -> bool:
    """
    Check whether ``value`` looks like a paste event.

    Accepts objects carrying a ``clipboard_data`` attribute (which may be
    None when the platform gave no clipboard) and clipboard objects
    exposing ``get_data``/``getData`` directly.
    """
    if value is None or isinstance(value, (str, bytes)):
        return False
    return hasattr(value, "clipboard_data") or _reader(value) is not None


def extract_html(event: Any) -> str:
    """
    Pull an HTML fragment out of a paste event.

    ``text/html`` wins; otherwise ``text/plain`` is escaped and wrapped in
    a paragraph. An event without clipboard data yields an empty string.
    """
    source = getattr(event, "clipboard_data", event)
    if source is None:
        return ""

    get_data = _reader(source)
    if get_data is None:
        return ""

    fragment = get_data(HTML_MIME)
    if fragment:
        return fragment

    text = get_data(TEXT_MIME)
    return f"<p>{html.escape(text)}</p>" if text else ""
