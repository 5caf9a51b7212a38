"""Project config file (``tailwindcss-mangle.config.yaml``)."""

from .defaults import (
    CONFIG_FILE,
    CONFIG_NAME,
    get_default_registry_config,
    get_default_transformer_config,
    get_default_user_config,
)
from .loader import ConfigResult, get_config, get_config_path, init_config, load_patch_options

__all__ = [
    "CONFIG_FILE",
    "CONFIG_NAME",
    "get_default_registry_config",
    "get_default_transformer_config",
    "get_default_user_config",
    "ConfigResult",
    "get_config",
    "get_config_path",
    "init_config",
    "load_patch_options",
]
