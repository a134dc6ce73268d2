"""Configuration entrypoint (re-exported from split modules)."""

from .config_loader import get_config, load_config, reset_config, set_config
from .config_settings import DEFAULT_MANAGED_TAG, Config

__all__ = [
    "DEFAULT_MANAGED_TAG",
    "Config",
    "get_config",
    "load_config",
    "reset_config",
    "set_config",
]
