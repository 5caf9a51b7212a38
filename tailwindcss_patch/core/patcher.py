"""TailwindcssPatcher: the public orchestrator.

Ties the components together for one project:

    options ─► normalize ─► package lookup ─► major version
                                                  │
                         ┌────────────────────────┴──────────┐
                         v2/v3                               v4
              build once ─► runtime contexts     scan sources ─► design system
                         └────────────► observed set ◄───────┘
                                             │
                                      cache reconcile ─► extract (write output)

One instance serves one project. Concurrent ``get_class_set`` calls share
a single in-flight build.
"""

import asyncio
import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Set

from .cache import CacheStore, reconcile, reconcile_sync
from .constants import DEFAULT_V4_CSS, OUTPUT_FORMAT_JSON
from .errors import ConfigurationError
from .extraction import (
    SourceEntry,
    TokenByFileMap,
    TokenReport,
    extract_project_candidates_with_positions,
    extract_raw_candidates,
    group_tokens_by_file,
)
from .options import NormalizedOptions, resolve_patcher_options
from .packages import PackageInfo, get_package_info_sync
from .patching import PatchReport, apply_tailwind_patches
from .runtime import NodeBridge, RuntimeContext, get_collector, load_runtime_contexts, validate_candidates
from .version import resolve_major_version

logger = logging.getLogger(__name__)


class BuildState(Enum):
    NOT_STARTED = "not_started"
    IN_FLIGHT = "in_flight"
    COMPLETE = "complete"


@dataclass
class ExtractResult:
    """Result of ``TailwindcssPatcher.extract``.

    Attributes:
        class_list: Sorted class names
        class_set: Same classes as a set
        filename: Output file, set only when the list was written
    """

    class_list: List[str]
    class_set: Set[str]
    filename: Optional[str] = None


class TailwindcssPatcher:
    """Extracts and caches the Tailwind classes of one project.

    Args:
        options: Patcher options in the current or the legacy shape
        bridge: Node bridge used for builds and v4 validation

    Raises:
        ConfigurationError: The Tailwind package cannot be located
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None, bridge: Optional[NodeBridge] = None):
        self.options: NormalizedOptions = resolve_patcher_options(options)
        self.bridge = bridge or NodeBridge()

        tailwind = self.options.tailwind
        package_info = get_package_info_sync(tailwind.package_name, tailwind.resolve.paths)
        if package_info is None:
            raise ConfigurationError(f'Unable to locate Tailwind CSS package "{tailwind.package_name}".')

        self.package_info: PackageInfo = package_info
        self.major_version = resolve_major_version(package_info.version, tailwind.version_hint)
        self.cache_store = CacheStore(self.options.cache)
        self.collector = get_collector(
            self.major_version,
            self.options,
            self.package_info,
            contexts_supplier=self.get_contexts,
            bridge=self.bridge,
        )

        self._build_state = BuildState.NOT_STARTED
        self._build_task: Optional[asyncio.Task] = None

        logger.info(
            f"Using {package_info.name}@{package_info.version} "
            f"(v{self.major_version} strategy) at {package_info.root_path}"
        )

    @property
    def build_state(self) -> BuildState:
        return self._build_state

    # =========================================================================
    # Runtime
    # =========================================================================

    async def patch(self) -> PatchReport:
        """Apply the runtime patches to the installed package."""
        return await asyncio.to_thread(
            apply_tailwind_patches, self.package_info, self.options, self.major_version
        )

    def get_contexts(self) -> List[RuntimeContext]:
        return load_runtime_contexts(
            self.package_info, self.major_version, self.options.context_ref_property
        )

    async def _ensure_built(self) -> None:
        if not self.collector.requires_build or self._build_state is BuildState.COMPLETE:
            return

        if self._build_task is None:
            self._build_state = BuildState.IN_FLIGHT
            self._build_task = asyncio.ensure_future(self.collector.build())

        task = self._build_task
        try:
            await asyncio.shield(task)
        except Exception:
            if self._build_task is task:
                self._build_task = None
                self._build_state = BuildState.NOT_STARTED
            raise

        self._build_state = BuildState.COMPLETE

    # =========================================================================
    # Class sets
    # =========================================================================

    async def get_class_set(self) -> Set[str]:
        """Observed classes reconciled with the cache.

        Raises:
            BuildExecutionError: The build or v4 validation failed
        """
        await self._ensure_built()
        observed = await self.collector.collect()
        logger.info(f"Collected {len(observed)} classes")
        return await reconcile(self.cache_store, observed, self.options.cache.strategy)

    def get_class_set_sync(self) -> Set[str]:
        """Synchronous ``get_class_set`` from the last context snapshot.

        Raises:
            UnsupportedOperationError: Tailwind CSS v4 project
        """
        observed = self.collector.collect_sync()
        return reconcile_sync(self.cache_store, observed, self.options.cache.strategy)

    async def extract(self, write: Optional[bool] = None) -> ExtractResult:
        """Collect the class list and optionally write it to ``output.file``."""
        output = self.options.output
        should_write = output.enabled if write is None else write

        class_set = await self.get_class_set()
        result = ExtractResult(class_list=sorted(class_set), class_set=class_set)
        if not should_write or not output.file:
            return result

        await asyncio.to_thread(self._write_output, output.file, result.class_list)
        logger.info(f"Tailwind CSS class list saved to {os.path.relpath(output.file)}")
        result.filename = output.file
        return result

    def _write_output(self, target: str, class_list: List[str]) -> None:
        os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
        output = self.options.output
        with open(target, "w", encoding="utf-8") as f:
            if output.format == OUTPUT_FORMAT_JSON:
                json.dump(class_list, f, indent=output.pretty or None)
            else:
                f.write("\n".join(class_list) + "\n")

    # =========================================================================
    # Content tokens
    # =========================================================================

    async def collect_content_tokens(
        self, cwd: Optional[str] = None, sources: Optional[Sequence[SourceEntry]] = None
    ) -> TokenReport:
        return await asyncio.to_thread(
            extract_project_candidates_with_positions,
            cwd or self.options.project_root,
            sources if sources is not None else self.options.tailwind.v4.sources,
        )

    async def collect_content_tokens_by_file(
        self,
        cwd: Optional[str] = None,
        sources: Optional[Sequence[SourceEntry]] = None,
        key: Optional[str] = None,
        strip_absolute_paths: Optional[bool] = None,
    ) -> TokenByFileMap:
        report = await self.collect_content_tokens(cwd=cwd, sources=sources)
        return group_tokens_by_file(report, key=key, strip_absolute_paths=strip_absolute_paths)

    async def extract_valid_candidates(
        self,
        content: str,
        extension: str = "html",
        css: Optional[str] = None,
        base: Optional[str] = None,
    ) -> List[str]:
        """Candidates in ``content`` that the v4 design system generates CSS for.

        Returned in order of first occurrence.
        """
        candidates = list(dict.fromkeys(extract_raw_candidates(content, extension)))
        entries = [{"css": css or DEFAULT_V4_CSS, "base": base or self.options.tailwind.v4.base}]
        valid = await asyncio.to_thread(
            validate_candidates, candidates, entries, self.options.project_root, self.bridge
        )
        return [candidate for candidate in candidates if candidate in valid]
