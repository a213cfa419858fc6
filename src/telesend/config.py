"""Configuration for the ``telesend`` command-line tool.

The library itself reads neither files nor environment: callers pass a
:class:`~telesend.models.BotInstance` and, optionally, a
:class:`~telesend.models.ClientConfig`.  This module is what the CLI uses to
assemble both.

* **Config file** -- a single :class:`ClientConfig` JSON file.  On Linux/BSD
  it lives in ``$XDG_CONFIG_HOME/telesend/config.json`` (default
  ``~/.config/telesend/``); elsewhere in ``~/.telesend/config.json``.
* **Precedence** -- :func:`resolve_client_config` layers CLI flags over
  environment variables over the config file over defaults.
* **Credentials** -- :func:`resolve_instance` takes the token and chat id
  from flags or ``TELESEND_BOT_TOKEN`` / ``TELESEND_CHAT_ID``.  They are
  never written to disk.

Writes use a temp-file-then-rename strategy (:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from telesend.exceptions import ConfigError
from telesend.models import BotInstance, ClientConfig

_APP_NAME = "telesend"
_CONFIG_FILENAME = "config.json"

ENV_BOT_TOKEN = "TELESEND_BOT_TOKEN"
ENV_CHAT_ID = "TELESEND_CHAT_ID"

# Environment variable -> ClientConfig field
_ENV_OVERRIDES = {
    "TELESEND_BASE_URL": "base_url",
    "TELESEND_TIMEOUT": "timeout",
    "TELESEND_VERIFY_SSL": "verify_ssl",
    "TELESEND_PROXY": "proxy",
    "TELESEND_CA_BUNDLE": "ca_bundle",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True on platforms following the XDG Base Directory spec (Linux/BSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory (not created).

    On Linux/BSD: ``$XDG_CONFIG_HOME/telesend/`` (default ``~/.config/telesend/``).
    On macOS/Windows: ``~/.telesend/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        return base / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


def get_config_path() -> Path:
    """Path to the client config file."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* via a temp file in the same directory and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as fd:
            tmp_path = fd.name
            fd.write(data)
            fd.flush()
            os.fsync(fd.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


# --- Config file ---


def load_client_config(path: Optional[Path] = None) -> ClientConfig:
    """Load the client configuration file.

    Args:
        path: Explicit file to read.  Defaults to :func:`get_config_path`.

    Returns:
        The parsed :class:`ClientConfig`, or defaults if the file is missing.

    Raises:
        ConfigError: If the file holds invalid JSON or unknown values.
    """
    path = path or get_config_path()
    if not path.is_file():
        return ClientConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ClientConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_client_config(config: ClientConfig, path: Optional[Path] = None) -> Path:
    """Persist *config* atomically and return the path written."""
    path = path or get_config_path()
    data = config.model_dump(mode="json", exclude_defaults=True)
    _atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


def update_client_config(key: str, value: str, path: Optional[Path] = None) -> ClientConfig:
    """Set a single field in the config file.

    The string *value* is validated against the field's type by pydantic;
    an empty string clears an optional field.

    Raises:
        ConfigError: If *key* is not a config field or *value* is invalid.
    """
    if key not in ClientConfig.model_fields:
        valid = ", ".join(ClientConfig.model_fields)
        raise ConfigError(f"Unknown config key '{key}'. Valid keys: {valid}")

    current = load_client_config(path).model_dump()
    current[key] = value if value != "" else None
    try:
        config = ClientConfig.model_validate(current)
    except ValidationError as exc:
        raise ConfigError(f"Invalid value for '{key}': {value}") from exc
    save_client_config(config, path)
    return config


# --- Precedence resolution ---


def resolve_client_config(
    cli_base_url: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    path: Optional[Path] = None,
) -> ClientConfig:
    """Resolve the effective :class:`ClientConfig`.

    Precedence (high to low):
        1. CLI flags (``cli_base_url``, ``cli_timeout``)
        2. Environment variables (``TELESEND_BASE_URL``, ``TELESEND_TIMEOUT``, ...)
        3. Config file
        4. Defaults

    Raises:
        ConfigError: If the file or an environment override is invalid.
    """
    data: dict[str, Any] = load_client_config(path).model_dump()

    for env_var, field in _ENV_OVERRIDES.items():
        env_value = os.environ.get(env_var)
        if env_value:
            data[field] = env_value

    if cli_base_url is not None:
        data["base_url"] = cli_base_url
    if cli_timeout is not None:
        data["timeout"] = cli_timeout

    try:
        return ClientConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc


def resolve_instance(
    cli_token: Optional[str] = None,
    cli_chat_id: Optional[str] = None,
) -> BotInstance:
    """Resolve the bot token and chat id: CLI flags first, then environment.

    Raises:
        ConfigError: Naming whichever of the two values is missing.
    """
    token = cli_token or os.environ.get(ENV_BOT_TOKEN)
    chat_id = cli_chat_id or os.environ.get(ENV_CHAT_ID)

    if not token and not chat_id:
        raise ConfigError(f"{ENV_BOT_TOKEN} and {ENV_CHAT_ID} environment variables are not set")
    if not token:
        raise ConfigError(f"{ENV_BOT_TOKEN} environment variable is not set")
    if not chat_id:
        raise ConfigError(f"{ENV_CHAT_ID} environment variable is not set")
    return BotInstance(bot_token=token, chat_id=chat_id)
