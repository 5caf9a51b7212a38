"""Error taxonomy for the extraction-and-cache engine.

Fatal errors propagate to the caller; recoverable ones are captured by the
component that raised them (skipped files, unreadable cache).
"""


class TailwindcssPatchError(Exception):
    """Base class for every error raised by tailwindcss_patch."""


class ConfigurationError(TailwindcssPatchError):
    """The project configuration cannot be used (e.g. Tailwind not installed)."""


class ConfigFileError(ConfigurationError):
    """The on-disk config file exists but is malformed."""


class UnsupportedOperationError(TailwindcssPatchError):
    """The requested operation is not available for the detected major version."""


class BuildExecutionError(TailwindcssPatchError):
    """A Tailwind build or a Node bridge invocation failed."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


class PatchApplicationError(TailwindcssPatchError):
    """A runtime patch could not be applied to the installed package."""


class RecoverableScanError(TailwindcssPatchError):
    """A single source file could not be scanned. Never aborts a scan."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(f"{file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason


class CacheReadError(TailwindcssPatchError):
    """The cache file exists but cannot be read. Recovered as an empty cache."""
