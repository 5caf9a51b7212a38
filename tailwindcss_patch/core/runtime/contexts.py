"""Runtime context snapshots (Tailwind v2/v3).

A Tailwind process keeps its generated classes in in-memory "contexts".
The build step serializes them; this module persists that snapshot next to
the package (``node_modules/.cache/tailwindcss-patch``) so the synchronous
collection path can read it without starting Node.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import List, Optional

from ..packages import PackageInfo

logger = logging.getLogger(__name__)


@dataclass
class RuntimeContext:
    """Serialized view of one Tailwind runtime context."""

    class_cache: List[str] = field(default_factory=list)
    candidate_rule_cache: List[str] = field(default_factory=list)
    ref_property: Optional[str] = None


def context_snapshot_path(package_info: PackageInfo, major_version: int) -> str:
    """Snapshot location for a package: ``<node_modules>/.cache/tailwindcss-patch``."""
    node_modules = os.path.dirname(package_info.root_path)
    if package_info.name.startswith("@"):
        node_modules = os.path.dirname(node_modules)
    return os.path.join(
        node_modules, ".cache", "tailwindcss-patch", f"runtime-contexts-v{major_version}.json"
    )


def save_runtime_contexts(
    package_info: PackageInfo, major_version: int, contexts: List[RuntimeContext]
) -> str:
    path = context_snapshot_path(package_info, major_version)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([asdict(context) for context in contexts], f)
    logger.debug(f"Saved {len(contexts)} runtime contexts to {path}")
    return path


def load_runtime_contexts(
    package_info: PackageInfo, major_version: int, ref_property: Optional[str]
) -> List[RuntimeContext]:
    """Return the contexts last exposed by the runtime under ``ref_property``.

    Returns an empty list when context exposure is disabled (``ref_property``
    is None), for v4 (no contexts), or when no build has produced a snapshot.
    """
    if ref_property is None or major_version not in (2, 3):
        return []

    path = context_snapshot_path(package_info, major_version)
    if not os.path.exists(path):
        logger.debug(f"No runtime context snapshot at {path}")
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable runtime context snapshot {path}: {e}")
        return []

    contexts = []
    for item in raw if isinstance(raw, list) else []:
        if not isinstance(item, dict) or item.get("ref_property") != ref_property:
            continue
        contexts.append(RuntimeContext(
            class_cache=list(item.get("class_cache") or []),
            candidate_rule_cache=list(item.get("candidate_rule_cache") or []),
            ref_property=ref_property,
        ))
    return contexts
