"""Major version resolution.

Picks the extraction strategy (2, 3 or 4) from the installed package
version and an optional explicit hint. Never raises.
"""

import re
from typing import Optional, Tuple

from .constants import DEFAULT_MAJOR_VERSION, SUPPORTED_MAJOR_VERSIONS

# First run of up to three dot-separated numbers, e.g. "v3.4" -> (3, 4, 0)
_VERSION_RE = re.compile(r"(?<!\d)(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def coerce_version(version: Optional[str]) -> Optional[Tuple[int, int, int]]:
    """Loosely parse a version string into ``(major, minor, patch)``.

    Args:
        version: Any version-ish string ("4.0.0", "v3.4", "^3.3.0-beta.1")

    Returns:
        Tuple of ints, or None when no number is present
    """
    if not version or not isinstance(version, str):
        return None
    match = _VERSION_RE.search(version)
    if not match:
        return None
    major, minor, patch = match.groups()
    return int(major), int(minor or 0), int(patch or 0)


def resolve_major_version(version: Optional[str] = None, hint: Optional[int] = None) -> int:
    """Resolve which major-version strategy applies.

    Args:
        version: Installed package version string, if known
        hint: Explicit major version from the options; wins when valid

    Returns:
        2, 3 or 4. Majors above 4 collapse to 4; unknown input yields 3.
    """
    if hint in SUPPORTED_MAJOR_VERSIONS:
        return hint

    coerced = coerce_version(version)
    if coerced:
        major = coerced[0]
        if major in (2, 3):
            return major
        if major >= 4:
            return 4

    return DEFAULT_MAJOR_VERSION
