"""Tests for the request builder."""

from __future__ import annotations

import json

import pytest

from telesend.builder import (
    URL_ERROR_MESSAGE,
    build_payload,
    build_request,
    build_url,
    redact_url,
)
from telesend.exceptions import BuildError, SerializationError, UrlInvalidError
from telesend.models import BotInstance, ParseMode, SendMessageOption

TOKEN = "123456:ABC-DEF1234ghIkl-zyx57W2v1u123ew11"
CHAT_ID = "-1001234567890"


# ---------------------------------------------------------------------------
# URL
# ---------------------------------------------------------------------------


class TestBuildUrl:
    def test_default_endpoint(self) -> None:
        assert build_url(TOKEN) == f"https://api.telegram.org/bot{TOKEN}/sendMessage"

    def test_custom_base_url_with_trailing_slash(self) -> None:
        url = build_url("42:xyz", base_url="http://localhost:8081/")
        assert url == "http://localhost:8081/bot42:xyz/sendMessage"

    def test_base_url_with_path_prefix(self) -> None:
        url = build_url("42:xyz", base_url="https://proxy.example.com/telegram")
        assert url == "https://proxy.example.com/telegram/bot42:xyz/sendMessage"

    @pytest.mark.parametrize("token", ["abc?chat_id=1", "abc#fragment", "abc\ndef"])
    def test_token_breaking_url_structure(self, token: str) -> None:
        with pytest.raises(UrlInvalidError) as exc_info:
            build_url(token)
        assert exc_info.value.message == URL_ERROR_MESSAGE

    @pytest.mark.parametrize("base_url", ["ftp://api.telegram.org", "not a url", ""])
    def test_unusable_base_url(self, base_url: str) -> None:
        with pytest.raises(UrlInvalidError):
            build_url(TOKEN, base_url=base_url)


class TestRedactUrl:
    def test_token_hidden(self) -> None:
        redacted = redact_url(build_url(TOKEN))
        assert TOKEN not in redacted
        assert redacted == "https://api.telegram.org/bot***/sendMessage"

    def test_url_without_token_segment_unchanged(self) -> None:
        assert redact_url("https://example.com/x") == "https://example.com/x"

    def test_base_path_starting_with_bot_kept(self) -> None:
        url = build_url("123456:SECRET", base_url="https://proxy.example.com/botapi")
        redacted = redact_url(url)
        assert "SECRET" not in redacted
        assert redacted == "https://proxy.example.com/botapi/bot***/sendMessage"

    def test_url_inside_error_text(self) -> None:
        text = f"All connection attempts failed for {build_url(TOKEN)}: refused"
        redacted = redact_url(text)
        assert TOKEN not in redacted
        assert redacted.endswith("/bot***/sendMessage: refused")


# ---------------------------------------------------------------------------
# Payload
# ---------------------------------------------------------------------------


class TestBuildPayload:
    def test_without_option_omits_parse_mode(self, instance: BotInstance) -> None:
        body = build_payload(instance, "hello")
        assert json.loads(body) == {"chat_id": CHAT_ID, "text": "hello"}
        assert b"parse_mode" not in body

    def test_option_without_mode_omits_parse_mode(self, instance: BotInstance) -> None:
        body = build_payload(instance, "hello", SendMessageOption())
        assert b"parse_mode" not in body
        assert b"null" not in body

    def test_markdown_v2(self, instance: BotInstance) -> None:
        body = build_payload(
            instance, "*bold*", SendMessageOption(parse_mode=ParseMode.MARKDOWN_V2)
        )
        assert b'"parse_mode":"MarkdownV2"' in body

    def test_html(self, instance: BotInstance) -> None:
        body = build_payload(instance, "<b>bold</b>", SendMessageOption(parse_mode=ParseMode.HTML))
        assert json.loads(body)["parse_mode"] == "HTML"

    def test_text_sent_verbatim(self, instance: BotInstance) -> None:
        text = "\\[Rustic\\] __under__  \n`code`\\. <b>not escaped</b> é☃"
        body = build_payload(instance, text)
        assert json.loads(body.decode("utf-8"))["text"] == text

    def test_body_is_compact_utf8(self, instance: BotInstance) -> None:
        body = build_payload(instance, "é")
        assert body == f'{{"chat_id":"{CHAT_ID}","text":"é"}}'.encode("utf-8")

    def test_empty_text_not_validated(self, instance: BotInstance) -> None:
        assert json.loads(build_payload(instance, ""))["text"] == ""

    def test_lone_surrogate_fails_serialization(self, instance: BotInstance) -> None:
        with pytest.raises(SerializationError) as exc_info:
            build_payload(instance, "broken \ud800 text")
        assert exc_info.value.message.startswith("Error serializing telegram request body")


# ---------------------------------------------------------------------------
# Full request
# ---------------------------------------------------------------------------


class TestBuildRequest:
    def test_request_shape(self, instance: BotInstance) -> None:
        request = build_request(instance, "hi")
        assert request.method == "POST"
        assert request.url == f"https://api.telegram.org/bot{TOKEN}/sendMessage"
        assert request.headers == {"content-type": "application/json"}
        assert json.loads(request.body) == {"chat_id": CHAT_ID, "text": "hi"}

    def test_deterministic(self, instance: BotInstance) -> None:
        option = SendMessageOption(parse_mode=ParseMode.HTML)
        assert build_request(instance, "x", option) == build_request(instance, "x", option)

    def test_bad_token_is_build_error(self) -> None:
        bad = BotInstance(bot_token="oops?x", chat_id=CHAT_ID)
        with pytest.raises(BuildError):
            build_request(bad, "hi")
