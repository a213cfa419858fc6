"""Shared test fixtures for telesend.

Provides a ready-made bot instance, helpers for simulating the Telegram
backend with :class:`httpx.MockTransport`, config isolation and a CLI
runner.  Fixtures are discovered automatically by pytest.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from telesend.models import BotInstance
from telesend.output import reset_output

TOKEN = "123456:ABC-DEF1234ghIkl-zyx57W2v1u123ew11"
CHAT_ID = "-1001234567890"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager caches sys.stdout/sys.stderr when it is created; CliRunner
    swaps those streams per invocation, so a stale manager would write to
    closed files.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Bot instance
# ---------------------------------------------------------------------------


@pytest.fixture
def instance() -> BotInstance:
    """A bot instance with a realistic token and a supergroup chat id."""
    return BotInstance(bot_token=TOKEN, chat_id=CHAT_ID)


# ---------------------------------------------------------------------------
# Simulated backend
# ---------------------------------------------------------------------------


def telegram_ok(request: httpx.Request) -> httpx.Response:
    """Handler that accepts every message the way Telegram does."""
    sent = json.loads(request.content)
    return httpx.Response(
        200,
        json={"ok": True, "result": {"message_id": 1, "text": sent["text"]}},
    )


def telegram_error(status_code: int, description: str) -> Callable[[httpx.Request], httpx.Response]:
    """Handler factory returning Telegram's JSON error body."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code,
            json={"ok": False, "error_code": status_code, "description": description},
        )

    return handler


class RecordingHandler:
    """Handler that records every request it receives."""

    def __init__(self, response: Callable[[httpx.Request], httpx.Response] = telegram_ok) -> None:
        self._response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._response(request)

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def backend() -> RecordingHandler:
    """A simulated Telegram backend that accepts every message."""
    return RecordingHandler()


@pytest.fixture
def error_backend() -> Callable[[int, str], RecordingHandler]:
    """Factory for a simulated backend that rejects every message."""

    def factory(status_code: int, description: str) -> RecordingHandler:
        return RecordingHandler(telegram_error(status_code, description))

    return factory


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at tmp_path and clear TELESEND_* variables.

    Returns:
        The config file path (not yet created).
    """
    monkeypatch.setattr("telesend.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in [
        "TELESEND_BOT_TOKEN",
        "TELESEND_CHAT_ID",
        "TELESEND_BASE_URL",
        "TELESEND_TIMEOUT",
        "TELESEND_VERIFY_SSL",
        "TELESEND_PROXY",
        "TELESEND_CA_BUNDLE",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path / "config" / "telesend" / "config.json"


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
