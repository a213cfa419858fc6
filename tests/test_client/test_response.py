"""Tests for raw responses and the response interpreter."""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from telesend.client.response import DECODE_ERROR_MESSAGE, RawResponse, interpret
from telesend.output import OutputManager, set_output
from telesend.status_codes import ERROR_INTERNAL_ERROR


@pytest.fixture(autouse=True)
def _quiet_output():
    set_output(OutputManager(no_color=True, quiet=True))


# ---------------------------------------------------------------------------
# RawResponse
# ---------------------------------------------------------------------------


class TestRawResponse:
    def test_from_httpx(self) -> None:
        response = httpx.Response(
            403,
            content=b'{"ok":false}',
            request=httpx.Request("POST", "https://api.telegram.org/botX/sendMessage"),
        )
        raw = RawResponse.from_httpx(response)
        assert raw.status_code == 403
        assert raw.content == b'{"ok":false}'

    def test_error_body_decodes(self) -> None:
        raw = RawResponse(
            400, b'{"ok":false,"error_code":400,"description":"Bad Request: chat not found"}'
        )
        body = raw.error_body()
        assert body.ok is False
        assert body.error_code == 400
        assert body.description == "Bad Request: chat not found"

    def test_error_body_rejects_missing_fields(self) -> None:
        with pytest.raises(ValidationError):
            RawResponse(400, b'{"ok":false}').error_body()

    def test_repr_hides_body(self) -> None:
        assert repr(RawResponse(200, b"secret")) == "RawResponse(status_code=200, content=6 bytes)"


# ---------------------------------------------------------------------------
# interpret
# ---------------------------------------------------------------------------


class TestInterpret:
    @pytest.mark.parametrize("content", [b'{"ok":true,"result":{}}', b"not json at all", b""])
    def test_200_is_success_regardless_of_body(self, content: bytes) -> None:
        assert interpret(RawResponse(200, content)) is None

    def test_remote_description_passed_through(self) -> None:
        raw = RawResponse(
            400,
            b'{"ok":false,"error_code":400,"description":"Bad Request: message text is empty"}',
        )
        result = interpret(raw)
        assert result is not None
        assert result.message == "Bad Request: message text is empty"
        assert result.code == ERROR_INTERNAL_ERROR

    def test_remote_error_code_not_propagated(self) -> None:
        raw = RawResponse(
            401, b'{"ok":false,"error_code":401,"description":"Unauthorized"}'
        )
        result = interpret(raw)
        assert result is not None
        assert result.code == ERROR_INTERNAL_ERROR

    def test_unparseable_body(self) -> None:
        result = interpret(RawResponse(500, b"<html>502 Bad Gateway</html>"))
        assert result is not None
        assert result.message == DECODE_ERROR_MESSAGE
        assert result.code == ERROR_INTERNAL_ERROR

    def test_json_without_expected_fields(self) -> None:
        result = interpret(RawResponse(404, b'{"error":"not found"}'))
        assert result is not None
        assert result.message == DECODE_ERROR_MESSAGE

    @pytest.mark.parametrize("status", [201, 204, 301, 429, 502])
    def test_any_non_200_status_is_an_error(self, status: int) -> None:
        raw = RawResponse(
            status, b'{"ok":false,"error_code":0,"description":"nope"}'
        )
        result = interpret(raw)
        assert result is not None
        assert result.message == "nope"
