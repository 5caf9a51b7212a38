"""Shared constants for tailwindcss_patch.

Defaults used by the options normalizer, the config loader and the CLI.
"""

# =============================================================================
# Tailwind package
# =============================================================================

DEFAULT_PACKAGE_NAME = "tailwindcss"

SUPPORTED_MAJOR_VERSIONS = (2, 3, 4)

# Strategy used when the installed version cannot be determined
DEFAULT_MAJOR_VERSION = 3

# =============================================================================
# Cache
# =============================================================================

DEFAULT_CACHE_SUBDIR = "node_modules/.cache/tailwindcss-patch"
DEFAULT_CACHE_FILE = "class-cache.json"

CACHE_STRATEGY_MERGE = "merge"
CACHE_STRATEGY_OVERWRITE = "overwrite"
CACHE_STRATEGIES = (CACHE_STRATEGY_MERGE, CACHE_STRATEGY_OVERWRITE)

# =============================================================================
# Output
# =============================================================================

DEFAULT_OUTPUT_FILE = ".tw-patch/tw-class-list.json"
DEFAULT_TOKEN_REPORT_FILE = ".tw-patch/tw-token-report.json"
DEFAULT_MAP_FILE = ".tw-patch/tw-map-list.json"

OUTPUT_FORMAT_JSON = "json"
OUTPUT_FORMAT_LINES = "lines"
OUTPUT_FORMATS = (OUTPUT_FORMAT_JSON, OUTPUT_FORMAT_LINES)

# Indent width used when `pretty: true` is given
DEFAULT_PRETTY_INDENT = 2

# =============================================================================
# Features
# =============================================================================

DEFAULT_CONTEXT_REF_PROPERTY = "contextRef"
DEFAULT_EXTRA_LENGTH_UNITS = ["rpx"]

# =============================================================================
# Sources
# =============================================================================

DEFAULT_SOURCE_PATTERN = "**/*"

# Entry CSS used for v4 when neither `css` nor `css_entries` is configured
DEFAULT_V4_CSS = '@import "tailwindcss";'
