"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for specmap:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.specmap/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`GlobalConfig` JSON file storing
  loader limits and the default output format.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables and the config file into the effective
  configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from specmap.exceptions import ConfigError

_APP_NAME = "specmap"
_CONFIG_FILENAME = "config.json"

_ENV_TIMEOUT = "SPECMAP_TIMEOUT"
_ENV_VERIFY_SSL = "SPECMAP_VERIFY_SSL"
_ENV_MAX_BYTES = "SPECMAP_MAX_BYTES"
_ENV_FORMAT = "SPECMAP_FORMAT"

_TRUE_VALUES = frozenset(("1", "true", "yes", "on"))
_FALSE_VALUES = frozenset(("0", "false", "no", "off"))


# --- Models ---


class LoaderConfig(BaseModel):
    """Limits applied when reading a spec source.

    See :func:`~specmap.parser.loader.load_api`.
    """

    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    max_bytes: int = Field(
        default=50 * 1024 * 1024,
        gt=0,
        description="Largest document accepted, in bytes",
    )


class OutputConfig(BaseModel):
    """Default output format preferences."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/specmap/config.json``.

    Loaded and saved by :func:`load_global_config` and
    :func:`save_global_config`. Fields here have the lowest precedence and
    can be overridden by environment variables or CLI flags.
    """

    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/specmap/`` (default ``~/.config/specmap/``).
    On macOS/Windows: ``~/.specmap/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/specmap/`` (default ``~/.local/share/specmap/``).
    On macOS/Windows: ``~/.specmap/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* atomically via a temp file in the same directory.

    Raises:
        ConfigError: If the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise ConfigError(f"Failed to write {path}: {exc}") from exc


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global config, returning defaults if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not valid JSON or fails
            validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        text = path.read_text(encoding="utf-8")
        return GlobalConfig.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global config atomically."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


def set_config_value(key: str, value: str) -> GlobalConfig:
    """Set a dotted *key* (e.g. ``loader.timeout``) in the global config and save it.

    The value is validated against the field's type before anything is
    written.

    Returns:
        The updated configuration.

    Raises:
        ConfigError: If the key is unknown or the value does not validate.
    """
    section, _, field = key.partition(".")
    config = load_global_config()
    data = config.model_dump(mode="python")
    if section not in data or field not in data[section]:
        raise ConfigError(f"Unknown config key: {key}")
    data[section][field] = value
    try:
        updated = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from exc
    save_global_config(updated)
    return updated


# --- Precedence resolution ---


def _env_bool(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _env_number(name: str, kind: type) -> Optional[Any]:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def resolve_config(
    cli_timeout: Optional[float] = None,
    cli_max_bytes: Optional[int] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_timeout``, ``cli_max_bytes``, ``cli_format``)
        2. Environment variables (``SPECMAP_TIMEOUT``, ``SPECMAP_VERIFY_SSL``,
           ``SPECMAP_MAX_BYTES``, ``SPECMAP_FORMAT``)
        3. User config (``~/.config/specmap/config.json``)
        4. Defaults

    Raises:
        ConfigError: If the config file or an environment value is invalid.
    """
    # 4 + 3. Load base global config (fills in defaults automatically)
    data = load_global_config().model_dump(mode="python")

    # 2. Environment variables
    overrides = {
        ("loader", "timeout"): _env_number(_ENV_TIMEOUT, float),
        ("loader", "verify_ssl"): _env_bool(_ENV_VERIFY_SSL),
        ("loader", "max_bytes"): _env_number(_ENV_MAX_BYTES, int),
        ("output", "format"): os.environ.get(_ENV_FORMAT) or None,
    }
    # 1. CLI flags (highest precedence)
    if cli_timeout is not None:
        overrides[("loader", "timeout")] = cli_timeout
    if cli_max_bytes is not None:
        overrides[("loader", "max_bytes")] = cli_max_bytes
    if cli_format is not None:
        overrides[("output", "format")] = cli_format

    for (section, field), value in overrides.items():
        if value is not None:
            data[section][field] = value

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
