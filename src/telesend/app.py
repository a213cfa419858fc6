"""Typer application and CLI entry point for telesend.

Sub-commands:

* ``telesend send MESSAGE`` -- send one message, blocking or via asyncio.
* ``telesend config show|set|path`` -- inspect and edit the client config.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import asyncio
import signal
import sys
from typing import Any, Optional

import typer

from telesend import __version__
from telesend.exceptions import ConfigError
from telesend.models import BotInstance, ErrorResult, ParseMode, SendMessageOption
from telesend.output import (
    OutputFormat,
    OutputManager,
    debug,
    error,
    format_response,
    get_output,
    info,
    set_output,
    success,
)
from telesend.status_codes import (
    EXIT_INVALID_USAGE,
    EXIT_SEND_FAILURE,
)

app = typer.Typer(
    name="telesend",
    help="Send messages to a Telegram chat through the Bot API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

config_app = typer.Typer(no_args_is_help=True, help="Client configuration management.")
app.add_typer(config_app, name="config")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"telesend {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Install the global :class:`~telesend.output.OutputManager` from the flags."""
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))


# ------------------------------------------------------------------ #
# send
# ------------------------------------------------------------------ #


def _read_message(message: str) -> str:
    """Return *message*, or stdin's contents when it is ``-``."""
    if message == "-":
        return sys.stdin.read()
    return message


def _report(outcome: Optional[ErrorResult]) -> None:
    """Print the outcome and exit non-zero on failure."""
    if get_output().format == OutputFormat.JSON:
        if outcome is None:
            format_response({"ok": True})
        else:
            format_response({"ok": False, **outcome.model_dump()})

    if outcome is None:
        success("Message sent.")
        return

    error(str(outcome))
    raise typer.Exit(code=EXIT_SEND_FAILURE)


@app.command("send")
def send_command(
    message: str = typer.Argument(help="Message text, or '-' to read it from stdin."),
    token: Optional[str] = typer.Option(
        None, "--token", "-t", help="Bot token. Defaults to $TELESEND_BOT_TOKEN."
    ),
    chat_id: Optional[str] = typer.Option(
        None, "--chat-id", "-c", help="Target chat id. Defaults to $TELESEND_CHAT_ID."
    ),
    parse_mode: Optional[ParseMode] = typer.Option(
        None, "--parse-mode", "-m", case_sensitive=False, help="Text markup mode."
    ),
    use_async: bool = typer.Option(
        False, "--async", help="Send through the asyncio client."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the request instead of sending it."
    ),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Bot API root URL."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Timeout in seconds."),
) -> None:
    """Send a message to the configured chat.

    Example::

        telesend send "build *passed*" --parse-mode markdownv2
        echo "done" | telesend send -
    """
    from telesend.api import send_message, send_message_async
    from telesend.config import resolve_client_config, resolve_instance

    try:
        instance = resolve_instance(token, chat_id)
        config = resolve_client_config(cli_base_url=base_url, cli_timeout=timeout)
    except ConfigError as exc:
        error(exc.message)
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    text = _read_message(message)
    option = SendMessageOption(parse_mode=parse_mode) if parse_mode else None

    if dry_run:
        _print_dry_run(instance, text, option, config.base_url)
        return

    debug(f"Sending {len(text)} characters to chat {instance.chat_id}")
    if use_async:
        outcome = asyncio.run(send_message_async(instance, text, option, config=config))
    else:
        outcome = send_message(instance, text, option, config=config)
    _report(outcome)


def _print_dry_run(
    instance: BotInstance,
    text: str,
    option: Optional[SendMessageOption],
    base_url: str,
) -> None:
    """Print the request that would be sent, with the token redacted."""
    from telesend.builder import build_request, redact_url
    from telesend.errors import to_error_result
    from telesend.exceptions import BuildError

    try:
        request = build_request(instance, text, option, base_url=base_url)
    except BuildError as exc:
        _report(to_error_result(exc))
        return

    info(f"[dry-run] {request.method} {redact_url(request.url)}")
    for key, value in request.headers.items():
        info(f"  Header: {key}: {value}")
    format_response(
        {
            "method": request.method,
            "url": redact_url(request.url),
            "body": request.body.decode("utf-8"),
        }
    )


# ------------------------------------------------------------------ #
# config
# ------------------------------------------------------------------ #


@config_app.command("show")
def config_show() -> None:
    """Show the effective client configuration (file + environment)."""
    from telesend.config import get_config_path, resolve_client_config

    try:
        config = resolve_client_config()
    except ConfigError as exc:
        error(exc.message)
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    info(f"Config file: {get_config_path()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key, e.g. 'timeout' or 'proxy'."),
    value: str = typer.Argument(help="Value to set; empty string clears it."),
) -> None:
    """Set a value in the client config file.

    Example::

        telesend config set timeout 10
        telesend config set proxy http://127.0.0.1:3128
    """
    from telesend.config import update_client_config

    try:
        update_client_config(key, value)
    except ConfigError as exc:
        error(exc.message)
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    success(f"Set {key} = {value!r}")


@config_app.command("path")
def config_path() -> None:
    """Print the config file location."""
    from telesend.config import get_config_path

    typer.echo(str(get_config_path()))


# ------------------------------------------------------------------ #
# Entry point
# ------------------------------------------------------------------ #


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``telesend`` console script."""
    _setup_signal_handlers()
    app()
