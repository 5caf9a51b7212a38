from .cache import CacheStore, reconcile, reconcile_sync
from .config import ConfigResult, get_config, init_config, load_patch_options
from .errors import (
    BuildExecutionError,
    CacheReadError,
    ConfigFileError,
    ConfigurationError,
    PatchApplicationError,
    RecoverableScanError,
    TailwindcssPatchError,
    UnsupportedOperationError,
)
from .extraction import (
    SourceEntry,
    TokenLocation,
    TokenReport,
    extract_project_candidates_with_positions,
    extract_raw_candidates,
    extract_raw_candidates_with_positions,
    group_tokens_by_file,
)
from .options import from_legacy_options, from_unified_config, merge_options, normalize_options
from .patcher import BuildState, ExtractResult, TailwindcssPatcher
from .version import resolve_major_version

__all__ = [
    "CacheStore",
    "reconcile",
    "reconcile_sync",
    "ConfigResult",
    "get_config",
    "init_config",
    "load_patch_options",
    "BuildExecutionError",
    "CacheReadError",
    "ConfigFileError",
    "ConfigurationError",
    "PatchApplicationError",
    "RecoverableScanError",
    "TailwindcssPatchError",
    "UnsupportedOperationError",
    "SourceEntry",
    "TokenLocation",
    "TokenReport",
    "extract_project_candidates_with_positions",
    "extract_raw_candidates",
    "extract_raw_candidates_with_positions",
    "group_tokens_by_file",
    "from_legacy_options",
    "from_unified_config",
    "merge_options",
    "normalize_options",
    "BuildState",
    "ExtractResult",
    "TailwindcssPatcher",
    "resolve_major_version",
]
