"""Configuration management for jamf using Pydantic models."""

import json
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

CONFIG_FILENAME = ".jamf.json"


class ParseParams(BaseModel):
    """Per-call parse parameters.

    Accepts both the Python field names and the camelCase aliases
    (``parseToBSON``, ``errorMap``, ``async``).
    """
    path: list[str | int] = Field(default_factory=list)
    error_map: Callable[..., Any] | None = Field(alias="errorMap", default=None)
    async_: bool = Field(alias="async", default=False)
    parse_to_bson: bool = Field(alias="parseToBSON", default=False)

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")


_PARAM_ALIASES = {
    info.alias: name for name, info in ParseParams.model_fields.items() if info.alias
}


def _normalize_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    return {_PARAM_ALIASES.get(key, key): value for key, value in values.items()}


def resolve_params(params: ParseParams | Mapping[str, Any] | None = None, **overrides: Any) -> ParseParams:
    """Merge call parameters and keyword overrides into one ParseParams.

    Args:
        params: ParseParams instance, mapping of parameters, or None
        **overrides: Individual parameters; these win over ``params``

    Returns:
        ParseParams: Validated parameters

    Raises:
        pydantic.ValidationError: If a parameter is unknown or has the wrong type
    """
    if isinstance(params, ParseParams):
        if not overrides:
            return params
        values = {name: getattr(params, name) for name in ParseParams.model_fields}
    elif params is None:
        values = {}
    else:
        values = _normalize_keys(params)

    values.update(_normalize_keys(overrides))
    return ParseParams.model_validate(values)


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    @property
    def numeric(self) -> int:
        return {
            LogLevel.ERROR: 40,
            LogLevel.WARN: 30,
            LogLevel.INFO: 20,
            LogLevel.DEBUG: 10,
        }[self]


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class JamfConfig(BaseModel):
    """Complete jamf configuration model."""
    parse_to_bson: bool = Field(alias="parseToBSON", default=False)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


def load_config(config_path: str | Path | None = None) -> JamfConfig:
    """Read parse defaults and logging settings for the CLI.

    An explicit path that does not exist, or no ``.jamf.json`` found above the
    working directory, gives the built-in defaults.

    Raises:
        ValueError: If the file is not JSON or does not describe a JamfConfig
    """
    path = find_config_file() if config_path is None else Path(config_path)
    if path is None or not path.is_file():
        return create_default_config()

    try:
        config_data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}")

    try:
        return JamfConfig.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Failed to load config from {path}: {e}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest ``.jamf.json`` in ``start_dir`` (default: cwd) or its ancestors."""
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def create_default_config() -> JamfConfig:
    """Create default configuration: plain output, warnings and above logged."""
    return JamfConfig()
