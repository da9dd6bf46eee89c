"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from vendfa.app.errors import InvalidConfigError, MissingConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DisplayConfig:
    """Console rendering configuration."""

    currency_symbol: str = "₹"
    newest_first: bool = True
    time_format: str = "%H:%M:%S"
    max_log_entries: int = 0  # 0 = unlimited


@dataclass
class Settings:
    """Main application settings."""

    name: str = "vendfa"
    version: str = "0.1.0"
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: str | None = None

    display: DisplayConfig = field(default_factory=DisplayConfig)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_config(config_dir: Path, env: str = "dev") -> dict[str, Any]:
    """Load YAML configuration files."""
    config: dict[str, Any] = {}

    base_path = config_dir / "base.yaml"
    if base_path.exists():
        with open(base_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

    env_path = config_dir / f"{env}.yaml"
    if env_path.exists():
        with open(env_path, encoding="utf-8") as f:
            env_config = yaml.safe_load(f) or {}
            config = _deep_merge(config, env_config)

    return config


def _check_type(key: str, value: Any, expected: type) -> Any:
    """Reject YAML values of the wrong type; bools never pass as ints."""
    if isinstance(value, bool) and expected is not bool:
        raise InvalidConfigError(key, value, f"expected {expected.__name__}")
    if not isinstance(value, expected):
        raise InvalidConfigError(key, value, f"expected {expected.__name__}")
    return value


def _get_yaml(config: dict[str, Any], section: str, key: str, default: Any) -> Any:
    """Read a typed value from a YAML section, falling back to the default."""
    if config.get(key) is None:
        return default
    return _check_type(f"{section}.{key}", config[key], type(default))


def _build_section(cls: type, section: str, values: dict[str, Any]) -> Any:
    """Instantiate a config dataclass, rejecting unknown keys and mistyped values."""
    declared = {f.name: f for f in fields(cls)}
    for key, value in values.items():
        if key not in declared:
            raise InvalidConfigError(f"{section}.{key}", value, "unknown setting")
        _check_type(f"{section}.{key}", value, type(declared[key].default))
    return cls(**values)


def _get_env(key: str, default: str = "") -> str:
    """Get environment variable with default."""
    return os.environ.get(key, default)


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    value = os.environ.get(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def load_settings(
    config_dir: Path | str | None = None,
    env: str | None = None,
    dotenv_path: Path | str | None = None,
) -> Settings:
    """
    Load settings from YAML config and environment variables.

    Priority (highest to lowest):
    1. Environment variables
    2. Environment-specific YAML (e.g., prod.yaml)
    3. Base YAML (base.yaml)
    4. Defaults

    Args:
        config_dir: Path to config directory (default: ./config)
        env: Environment name (default: $VENDFA_ENV, else "dev")
        dotenv_path: Path to .env file (default: ./.env)

    Returns:
        Loaded Settings object

    Raises:
        MissingConfigError: an explicitly given config_dir does not exist
        InvalidConfigError: a YAML key is unknown or has the wrong type
    """
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    if env is None:
        env = _get_env("VENDFA_ENV", "dev") or "dev"

    if config_dir is None:
        config_dir = Path("config")
    else:
        config_dir = Path(config_dir)
        if not config_dir.is_dir():
            raise MissingConfigError(str(config_dir))

    yaml_config = _load_yaml_config(config_dir, env)

    app_config = yaml_config.get("app", {}) or {}
    logging_config = yaml_config.get("logging", {}) or {}
    display_config = yaml_config.get("display", {}) or {}

    display = _build_section(DisplayConfig, "display", display_config)
    display.currency_symbol = _get_env("VENDFA_CURRENCY", display.currency_symbol)

    log_file = _get_env("VENDFA_LOG_FILE", _get_yaml(logging_config, "logging", "file", "")) or None

    return Settings(
        name=_get_yaml(app_config, "app", "name", "vendfa"),
        version=_get_yaml(app_config, "app", "version", "0.1.0"),
        log_level=_get_env("VENDFA_LOG_LEVEL", _get_yaml(logging_config, "logging", "level", "INFO")),
        json_logs=_get_env_bool("VENDFA_JSON_LOGS", _get_yaml(logging_config, "logging", "json", False)),
        log_file=log_file,
        display=display,
    )


def validate_settings(settings: Settings) -> list[str]:
    """
    Validate settings and return list of warnings/errors.

    Returns:
        List of validation messages (empty if all OK)
    """
    issues: list[str] = []
    display = settings.display

    if not isinstance(settings.log_level, str) or settings.log_level.upper() not in LOG_LEVELS:
        issues.append(
            f"ERROR: Unknown log level {settings.log_level!r}, expected one of {list(LOG_LEVELS)}"
        )

    if not isinstance(display.currency_symbol, str):
        issues.append(f"ERROR: display.currency_symbol must be a string, got {display.currency_symbol!r}")
    elif not display.currency_symbol:
        issues.append("WARNING: Empty currency symbol, amounts will render as bare numbers")

    if isinstance(display.max_log_entries, bool) or not isinstance(display.max_log_entries, int):
        issues.append(
            f"ERROR: display.max_log_entries must be an integer, got {display.max_log_entries!r}"
        )
    elif display.max_log_entries < 0:
        issues.append(
            f"ERROR: display.max_log_entries must be >= 0, got {display.max_log_entries}"
        )

    return issues
