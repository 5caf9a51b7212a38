"""Options handling: shape adapters, deep merge and normalization.

Public API:
    normalize_options(options)      -> NormalizedOptions
    resolve_patcher_options(options) -> NormalizedOptions (detects legacy shape)
    from_legacy_options(options)    -> current-shape dict
    from_unified_config(registry)   -> current-shape dict
    merge_options(*layers)          -> dict
"""

from typing import Any, Dict, Optional

from .legacy import from_legacy_options, from_unified_config, is_legacy_options
from .merge import merge_options
from .models import (
    CacheOptions,
    ExposeContextOptions,
    ExtendLengthUnitsOptions,
    FeatureOptions,
    NormalizedOptions,
    OutputOptions,
    ResolveOptions,
    TailwindOptions,
    V4Options,
    VersionExecutionOptions,
)
from .normalize import normalize_options

__all__ = [
    "normalize_options",
    "resolve_patcher_options",
    "from_legacy_options",
    "from_unified_config",
    "is_legacy_options",
    "merge_options",
    "CacheOptions",
    "ExposeContextOptions",
    "ExtendLengthUnitsOptions",
    "FeatureOptions",
    "NormalizedOptions",
    "OutputOptions",
    "ResolveOptions",
    "TailwindOptions",
    "V4Options",
    "VersionExecutionOptions",
]


def resolve_patcher_options(options: Optional[Dict[str, Any]] = None) -> NormalizedOptions:
    """Normalize options given in either the current or the legacy shape."""
    if is_legacy_options(options):
        options = from_legacy_options(options)
    return normalize_options(options)
