"""Tests for the AI-assisted cleaner."""

import asyncio
import json
import sys
from unittest.mock import patch

import httpx
import pytest

from paste_cleaner.ai import (
    AIRequestFailedError,
    AIUnavailableError,
    GeminiGenerator,
    build_prompt,
    clean_with_ai,
    extract_html_payload,
    is_ai_available,
    resolve_api_key,
)
from paste_cleaner.config import AIConfig


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class TestExtractHtmlPayload:
    """Tests for extract_html_payload."""

    @pytest.mark.parametrize(
        "text",
        [
            "<p>x</p>",
            "```html\n<p>x</p>\n```",
            "```HTML\n<p>x</p>\n```",
            "```\n<p>x</p>\n```",
            "  ```htm\n<p>x</p>\n```  \n",
            "Here is the cleaned HTML:\n```html\n<p>x</p>\n```\nLet me know!",
            "```\n```html\n<p>x</p>\n```\n```",
        ],
    )
    def test_unwraps_to_payload(self, text):
        assert extract_html_payload(text) == "<p>x</p>"

    @pytest.mark.parametrize("text", ["", "   ", "```html\n\n```", None])
    def test_empty_payload_is_unparsable(self, text):
        with pytest.raises(AIRequestFailedError):
            extract_html_payload(text)


class TestResolveApiKey:
    """Tests for resolve_api_key."""

    def test_explicit_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        assert resolve_api_key("sk-test", AIConfig()) == "sk-test"

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        assert resolve_api_key(True, AIConfig()) == "env-key"

    def test_custom_environment_variable(self, monkeypatch):
        monkeypatch.setenv("MY_KEY", "custom")
        assert resolve_api_key(True, AIConfig(api_key_env="MY_KEY")) == "custom"

    @pytest.mark.parametrize("ai", [True, "", "   "])
    def test_missing_key(self, monkeypatch, ai):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with pytest.raises(AIUnavailableError, match="GEMINI_API_KEY"):
            resolve_api_key(ai, AIConfig())


class TestCleanWithAI:
    """Tests for clean_with_ai with injected generators."""

    def test_generator_receives_key_and_prompt(self):
        calls = []

        async def generator(api_key, prompt):
            calls.append((api_key, prompt))
            return "```html\n<p>clean</p>\n```"

        result = asyncio.run(clean_with_ai("<p class='x'>clean</p>", "key-1", generator=generator))

        assert result == "<p>clean</p>"
        assert calls == [("key-1", build_prompt("<p class='x'>clean</p>"))]
        assert "<p class='x'>clean</p>" in calls[0][1]

    def test_generator_error_is_wrapped(self):
        async def generator(api_key, prompt):
            raise RuntimeError("quota exceeded")

        with pytest.raises(AIRequestFailedError, match="quota exceeded"):
            asyncio.run(clean_with_ai("<p>x</p>", "key", generator=generator))

    def test_unavailable_error_passes_through(self):
        async def generator(api_key, prompt):
            raise AIUnavailableError("no sdk")

        with pytest.raises(AIUnavailableError):
            asyncio.run(clean_with_ai("<p>x</p>", "key", generator=generator))

    def test_missing_key_skips_generator(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        called = False

        async def generator(api_key, prompt):
            nonlocal called
            called = True
            return "<p>x</p>"

        with pytest.raises(AIUnavailableError):
            asyncio.run(clean_with_ai("<p>x</p>", True, generator=generator))
        assert called is False


class TestGeminiGenerator:
    """Tests for the Gemini REST generator."""

    def make_generator(self, handler, **config_kwargs) -> GeminiGenerator:
        return GeminiGenerator(AIConfig(**config_kwargs), transport=httpx.MockTransport(handler))

    def test_successful_request(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers["x-goog-api-key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=gemini_reply("<p>ok</p>"))

        generator = self.make_generator(handler, model="gemini-test")
        result = asyncio.run(generator("secret", "clean this"))

        assert result == "<p>ok</p>"
        assert seen["url"].endswith("/models/gemini-test:generateContent")
        assert seen["key"] == "secret"
        assert seen["body"] == {"contents": [{"parts": [{"text": "clean this"}]}]}

    def test_joins_multiple_parts(self):
        reply = {"candidates": [{"content": {"parts": [{"text": "<p>a"}, {"text": "b</p>"}]}}]}
        generator = self.make_generator(lambda request: httpx.Response(200, json=reply))
        assert asyncio.run(generator("k", "p")) == "<p>ab</p>"

    @pytest.mark.parametrize("status", [400, 403, 429, 500, 503])
    def test_http_error_status(self, status):
        generator = self.make_generator(lambda request: httpx.Response(status, json={}))
        with pytest.raises(AIRequestFailedError, match=str(status)):
            asyncio.run(generator("k", "p"))

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        generator = self.make_generator(handler)
        with pytest.raises(AIRequestFailedError, match="connection refused"):
            asyncio.run(generator("k", "p"))

    def test_invalid_json(self):
        generator = self.make_generator(lambda request: httpx.Response(200, text="<html>oops"))
        with pytest.raises(AIRequestFailedError, match="invalid JSON"):
            asyncio.run(generator("k", "p"))

    @pytest.mark.parametrize(
        "payload",
        [{}, {"candidates": []}, {"candidates": [{"content": {}}]}, {"candidates": None}],
    )
    def test_unexpected_shape(self, payload):
        generator = self.make_generator(lambda request: httpx.Response(200, json=payload))
        with pytest.raises(AIRequestFailedError, match="Unexpected AI response shape"):
            asyncio.run(generator("k", "p"))

    def test_missing_httpx(self):
        with patch.dict(sys.modules, {"httpx": None}):
            with pytest.raises(AIUnavailableError, match="httpx"):
                asyncio.run(GeminiGenerator()("k", "p"))

    def test_end_to_end_with_clean_with_ai(self):
        reply = gemini_reply("```html\n<p>Hello</p>\n```")
        generator = self.make_generator(lambda request: httpx.Response(200, json=reply))
        result = asyncio.run(clean_with_ai("<p class='MsoNormal'>Hello</p>", "k", generator=generator))
        assert result == "<p>Hello</p>"


class TestIsAIAvailable:
    """Tests for is_ai_available."""

    def test_without_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        assert is_ai_available() is False

    def test_with_key(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "k")
        assert is_ai_available() is True

    def test_with_key_but_no_httpx(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "k")
        with patch.dict(sys.modules, {"httpx": None}):
            assert is_ai_available() is False
