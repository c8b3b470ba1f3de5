"""Tests for paste event extraction."""

import pytest

from paste_cleaner.utils.clipboard import extract_html, is_event_like


class Clipboard:
    def __init__(self, html="", text=""):
        self.data = {"text/html": html, "text/plain": text}

    def get_data(self, mime_type):
        return self.data.get(mime_type, "")


class Event:
    def __init__(self, clipboard_data):
        self.clipboard_data = clipboard_data


class TestIsEventLike:
    """Tests for is_event_like."""

    @pytest.mark.parametrize("value", [None, "<p>x</p>", b"<p>x</p>", 3, object()])
    def test_rejects(self, value):
        assert is_event_like(value) is False

    def test_event_with_clipboard(self):
        assert is_event_like(Event(Clipboard()))

    def test_event_without_clipboard(self):
        assert is_event_like(Event(None))

    def test_bare_clipboard(self):
        assert is_event_like(Clipboard())

    def test_camel_case_accessor(self):
        class DomClipboard:
            def getData(self, mime_type):
                return ""

        assert is_event_like(DomClipboard())

    def test_non_callable_accessor(self):
        class Broken:
            get_data = "text/html"

        assert is_event_like(Broken()) is False


class TestExtractHtml:
    """Tests for extract_html."""

    def test_html_wins(self):
        assert extract_html(Event(Clipboard(html="<b>x</b>", text="x"))) == "<b>x</b>"

    def test_text_is_escaped(self):
        event = Event(Clipboard(text='<script>"x"</script>'))
        assert extract_html(event) == "<p>&lt;script&gt;&quot;x&quot;&lt;/script&gt;</p>"

    @pytest.mark.parametrize("event", [Event(None), Event(Clipboard()), Event(object())])
    def test_nothing_to_extract(self, event):
        assert extract_html(event) == ""

    def test_bare_clipboard(self):
        assert extract_html(Clipboard(html="<i>y</i>")) == "<i>y</i>"
