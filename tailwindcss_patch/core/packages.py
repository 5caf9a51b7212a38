"""Installed Node package lookup.

Resolves ``node_modules/<name>/package.json`` the way Node's module
resolution walks parent directories from each search root.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class PackageInfo:
    """Metadata of an installed Node package."""

    name: str
    version: Optional[str]
    root_path: str
    package_json_path: str
    package_json: Dict[str, Any] = field(default_factory=dict)


def _candidate_dirs(start: str):
    current = os.path.abspath(start)
    while True:
        yield current
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def find_package_root(name: str, paths: Optional[List[str]] = None) -> Optional[str]:
    """Find the directory of an installed package.

    Args:
        name: Package name, scoped names included ("@tailwindcss/node")
        paths: Search roots; defaults to the working directory

    Returns:
        Absolute package directory, or None if not installed
    """
    for root in paths or [os.getcwd()]:
        for directory in _candidate_dirs(root):
            package_dir = os.path.join(directory, "node_modules", *name.split("/"))
            if os.path.isfile(os.path.join(package_dir, "package.json")):
                return package_dir
    return None


def get_package_info_sync(name: str, paths: Optional[List[str]] = None) -> Optional[PackageInfo]:
    """Load metadata of an installed package.

    Returns None when the package cannot be located or its package.json
    is unreadable.
    """
    package_dir = find_package_root(name, paths)
    if not package_dir:
        logger.debug(f"Package {name} not found from {paths}")
        return None

    package_json_path = os.path.join(package_dir, "package.json")
    try:
        with open(package_json_path, "r", encoding="utf-8") as f:
            package_json = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Cannot read {package_json_path}: {e}")
        return None

    if not isinstance(package_json, dict):
        logger.warning(f"Unexpected package.json content in {package_json_path}")
        return None

    info = PackageInfo(
        name=package_json.get("name", name),
        version=package_json.get("version"),
        root_path=package_dir,
        package_json_path=package_json_path,
        package_json=package_json,
    )
    logger.debug(f"Resolved {info.name}@{info.version} at {info.root_path}")
    return info
