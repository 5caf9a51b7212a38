"""Version-dispatched class collection.

Two strategies, selected once per patcher by ``get_collector``:

- ``LegacyContextCollector`` (v2, v3): reads the runtime contexts produced
  by the build prerequisite and keeps every cached class.
- ``DesignSystemCollector`` (v4): scans the configured sources for
  candidates and keeps those the v4 design system compiles to CSS. Async
  only.
"""

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Optional, Set

from ..constants import DEFAULT_V4_CSS
from ..errors import ConfigurationError, UnsupportedOperationError
from ..extraction import collect_project_candidates
from ..options.models import NormalizedOptions, V4Options
from ..packages import PackageInfo
from .bridge import NodeBridge
from .build import resolve_tailwind_execution_options, run_tailwind_build
from .contexts import RuntimeContext
from .scripts import DESIGN_SYSTEM_SCRIPT

logger = logging.getLogger(__name__)

ContextsSupplier = Callable[[], List[RuntimeContext]]


# =========================================================================
# Collection primitives
# =========================================================================


def collect_classes_from_contexts(
    contexts: Iterable[RuntimeContext], class_filter: Callable[[str], bool]
) -> Set[str]:
    """Every class cached by the given contexts that passes ``class_filter``."""
    classes: Set[str] = set()
    for context in contexts:
        for class_name in context.class_cache:
            if class_filter(class_name):
                classes.add(class_name)
    return classes


def design_system_entries(v4: V4Options) -> List[Dict[str, str]]:
    """CSS sources to load design systems from, each with its base directory."""
    if not v4.css_entries:
        return [{"css": v4.css or DEFAULT_V4_CSS, "base": v4.base}]

    entries = []
    for entry in v4.css_entries:
        try:
            with open(entry, "r", encoding="utf-8") as f:
                css = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read Tailwind CSS entry {entry}: {e}") from e
        entries.append({"css": css, "base": os.path.dirname(entry)})
    return entries


def validate_candidates(
    candidates: Iterable[str],
    entries: List[Dict[str, str]],
    cwd: str,
    bridge: Optional[NodeBridge] = None,
) -> Set[str]:
    """Keep the candidates a v4 design system can generate CSS for.

    Raises:
        BuildExecutionError: @tailwindcss/node could not be loaded or failed
    """
    ordered = sorted(set(candidates))
    if not ordered:
        return set()

    bridge = bridge or NodeBridge()
    result = bridge.run_script(
        DESIGN_SYSTEM_SCRIPT,
        {"cwd": cwd, "entries": entries, "candidates": ordered},
        cwd=cwd,
    )
    return set((result or {}).get("classes", []))


def collect_classes_from_tailwind_v4(
    options: NormalizedOptions, bridge: Optional[NodeBridge] = None
) -> Set[str]:
    """Scan ``tailwind.v4.sources`` and validate candidates against the CSS entries."""
    v4 = options.tailwind.v4
    candidates = collect_project_candidates(options.project_root, v4.sources)
    logger.debug(f"Validating {len(candidates)} candidates against the v4 design system")

    valid = validate_candidates(candidates, design_system_entries(v4), options.project_root, bridge)
    return {class_name for class_name in valid if options.filter(class_name)}


# =========================================================================
# Strategies
# =========================================================================


class ClassCollector(ABC):
    """Strategy producing the observed class set of one run."""

    requires_build = False

    def __init__(
        self,
        options: NormalizedOptions,
        package_info: PackageInfo,
        major_version: int,
        bridge: Optional[NodeBridge] = None,
    ):
        self.options = options
        self.package_info = package_info
        self.major_version = major_version
        self.bridge = bridge or NodeBridge()

    @abstractmethod
    async def collect(self) -> Set[str]:
        ...

    @abstractmethod
    def collect_sync(self) -> Set[str]:
        ...

    async def build(self) -> None:
        """Run the build prerequisite, if the strategy has one."""
        return None


class LegacyContextCollector(ClassCollector):
    """v2/v3: classes come from the runtime contexts."""

    requires_build = True

    def __init__(
        self,
        options: NormalizedOptions,
        package_info: PackageInfo,
        major_version: int,
        contexts_supplier: ContextsSupplier,
        bridge: Optional[NodeBridge] = None,
    ):
        super().__init__(options, package_info, major_version, bridge)
        self._contexts_supplier = contexts_supplier

    async def build(self) -> None:
        execution = resolve_tailwind_execution_options(self.options, self.major_version)
        await asyncio.to_thread(
            run_tailwind_build,
            execution.cwd,
            execution.config,
            self.major_version,
            execution.postcss_plugin,
            self.package_info,
            self.options.context_ref_property,
            self.bridge,
        )

    def collect_sync(self) -> Set[str]:
        contexts = self._contexts_supplier()
        classes = collect_classes_from_contexts(contexts, self.options.filter)
        logger.debug(f"Collected {len(classes)} classes from {len(contexts)} contexts")
        return classes

    async def collect(self) -> Set[str]:
        return await asyncio.to_thread(self.collect_sync)


class DesignSystemCollector(ClassCollector):
    """v4: classes are validated candidates; no synchronous path."""

    async def collect(self) -> Set[str]:
        return await asyncio.to_thread(collect_classes_from_tailwind_v4, self.options, self.bridge)

    def collect_sync(self) -> Set[str]:
        raise UnsupportedOperationError(
            "get_class_set_sync is not supported for Tailwind CSS v4 projects. Use get_class_set instead."
        )


def get_collector(
    major_version: int,
    options: NormalizedOptions,
    package_info: PackageInfo,
    contexts_supplier: ContextsSupplier,
    bridge: Optional[NodeBridge] = None,
) -> ClassCollector:
    """Select the collection strategy for a major version."""
    if major_version == 4:
        return DesignSystemCollector(options, package_info, major_version, bridge)
    if major_version in (2, 3):
        return LegacyContextCollector(options, package_info, major_version, contexts_supplier, bridge)
    raise ValueError(f"Unsupported Tailwind CSS major version: {major_version}")
