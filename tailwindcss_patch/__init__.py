"""tailwindcss_patch: Tailwind CSS class extraction and cache engine."""

from .core import (
    ExtractResult,
    TailwindcssPatcher,
    get_config,
    init_config,
    load_patch_options,
    normalize_options,
)

__version__ = "1.0.0"

__all__ = [
    "ExtractResult",
    "TailwindcssPatcher",
    "get_config",
    "init_config",
    "load_patch_options",
    "normalize_options",
]
