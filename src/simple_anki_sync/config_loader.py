"""Config loader utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config_settings import Config
from .error_codes import ErrorCode
from .exceptions import ConfigurationError
from .utils.logging import get_logger

_config: Config | None = None


def _candidate_paths(config_path: Path | None) -> list[Path]:
    if config_path:
        return [config_path.expanduser()]

    candidates: list[Path] = []
    env_path = os.getenv("SIMPLE_ANKI_SYNC_CONFIG")
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / "config.yaml")
    return candidates


def load_config(config_path: Path | None = None, *, validate: bool = True) -> Config:
    """Load configuration from environment, .env and an optional config.yaml.

    Values from the YAML file take precedence over the environment.

    Raises:
        ConfigurationError: If the YAML file is malformed or settings are invalid
    """
    logger = get_logger(__name__)

    candidates = _candidate_paths(config_path)
    resolved = next((p for p in candidates if p.exists()), None)
    if resolved is None:
        logger.debug("config_file_not_found", searched_paths=[str(p) for p in candidates])

    yaml_data: dict[str, Any] = {}
    if resolved is not None:
        try:
            with open(resolved, encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(
                "config_yaml_load_error",
                config_path=str(resolved),
                error=str(e),
                error_type=type(e).__name__,
            )
            msg = f"Failed to parse config file: {resolved}"
            raise ConfigurationError(
                msg,
                suggestion="Check YAML syntax (indentation, colons, quotes) and UTF-8 encoding.",
                error_code=ErrorCode.CFG_PARSE_FAILED.value,
            ) from e
        if not isinstance(yaml_data, dict):
            msg = f"Config file must contain a mapping: {resolved}"
            raise ConfigurationError(msg, error_code=ErrorCode.CFG_PARSE_FAILED.value)
        logger.debug("config_yaml_loaded", config_path=str(resolved), keys_count=len(yaml_data))

    known = set(Config.model_fields)
    config_kwargs = {k: v for k, v in yaml_data.items() if k in known}
    unknown = sorted(set(yaml_data) - known)
    if unknown:
        logger.warning("config_warning", unknown_keys=unknown)

    try:
        config = Config(**config_kwargs)
    except ValidationError as e:
        logger.error("config_validation_error", error=str(e))
        raise ConfigurationError(
            "Invalid configuration",
            suggestion=str(e),
            error_code=ErrorCode.CFG_INVALID.value,
        ) from e

    if validate:
        config.validate_config()

    logger.debug(
        "config_loaded",
        vault_path=str(config.vault_path),
        anki_connect_url=config.anki_connect_url,
    )
    return config


def get_config() -> Config:
    """Get singleton config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Config) -> None:
    """Set singleton config instance (for testing)."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset global config instance (for testing only)."""
    global _config
    _config = None


__all__ = ["Config", "get_config", "load_config", "reset_config", "set_config"]
