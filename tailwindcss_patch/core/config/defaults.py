"""Default contents of the ``tailwindcss-mangle`` config file."""

import re
from typing import Any, Dict

from ..constants import DEFAULT_MAP_FILE, DEFAULT_OUTPUT_FILE

CONFIG_NAME = "tailwindcss-mangle"
CONFIG_FILE = f"{CONFIG_NAME}.config.yaml"

DEFAULT_INCLUDE_PATTERNS = [
    r"\.(?:html|js|ts|jsx|tsx|vue|svelte|astro|elm|php|phtml|mdx|md)(?:$|\?)",
]
DEFAULT_EXCLUDE_PATTERNS = [
    r"[\\/]node_modules[\\/]",
    r"[\\/]\.git[\\/]",
]


def get_default_registry_config() -> Dict[str, Any]:
    return {
        "output": {
            "file": DEFAULT_OUTPUT_FILE,
            "pretty": True,
            "strip_universal_selector": True,
        },
        "tailwind": {},
    }


def get_default_transformer_config() -> Dict[str, Any]:
    """Transformer section; ``sources`` patterns are compiled."""
    return {
        "registry": {
            "file": DEFAULT_MAP_FILE,
        },
        "sources": {
            "include": [re.compile(p) for p in DEFAULT_INCLUDE_PATTERNS],
            "exclude": [re.compile(p) for p in DEFAULT_EXCLUDE_PATTERNS],
        },
    }


def get_default_user_config() -> Dict[str, Any]:
    return {
        "registry": get_default_registry_config(),
        "transformer": get_default_transformer_config(),
    }
