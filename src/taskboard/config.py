"""Load task board settings from an optional YAML file and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .constants import (
    CONFIG_FILE,
    DEFAULT_API_URL,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
    ENV_API_URL,
    ENV_CONFIG,
    ENV_CORS,
    ENV_DATABASE_URL,
    ENV_HOST,
    ENV_LOG_LEVEL,
    ENV_PORT,
    ENV_TIMEOUT,
)
from .errors import ConfigError
from .io_utils import load_yaml_mapping


@dataclass
class Settings:
    database_url: Optional[str] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    api_url: str = DEFAULT_API_URL
    log_level: str = DEFAULT_LOG_LEVEL
    enable_cors: bool = True
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


_ENV_KEYS = {
    ENV_DATABASE_URL: "database_url",
    ENV_HOST: "host",
    ENV_PORT: "port",
    ENV_API_URL: "api_url",
    ENV_LOG_LEVEL: "log_level",
    ENV_CORS: "enable_cors",
    ENV_TIMEOUT: "request_timeout",
}


def _truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in {"0", "false", "no", "off", ""}


def _coerce(name: str, value: Any) -> Any:
    try:
        if name == "port":
            return int(value)
        if name == "request_timeout":
            return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from exc
    if name == "enable_cors":
        return _truthy(value)
    if name == "log_level":
        return str(value).upper()
    if name == "database_url":
        return str(value).strip() or None
    return str(value)


def _load_file(path: Path) -> dict[str, Any]:
    try:
        raw = load_yaml_mapping(path)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    known = {f.name for f in fields(Settings)}
    # An empty YAML value (``host:``) loads as None and means "use the default".
    return {key: value for key, value in raw.items() if key in known and value is not None}


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> Settings:
    """Build :class:`Settings` from defaults, a YAML file, then environment.

    Args:
        env: Environment mapping (defaults to ``os.environ``).
        config_path: Explicit YAML file; otherwise ``$TASKBOARD_CONFIG`` or
            ``./taskboard.yaml`` when present.

    Returns:
        The merged settings.  Environment values win over file values.
    """
    env = os.environ if env is None else env
    if config_path is None:
        config_path = Path(env[ENV_CONFIG]) if env.get(ENV_CONFIG) else Path.cwd() / CONFIG_FILE

    values: dict[str, Any] = {}
    for key, value in _load_file(config_path).items():
        values[key] = _coerce(key, value)
    for env_key, name in _ENV_KEYS.items():
        if env_key in env:
            values[name] = _coerce(name, env[env_key])
    return Settings(**values)
