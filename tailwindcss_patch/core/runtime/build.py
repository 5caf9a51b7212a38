"""Tailwind v2/v3 build prerequisite.

The class set of a v2/v3 project lives in runtime contexts that only exist
after the PostCSS plugin has run once. ``run_tailwind_build`` runs it
through the Node bridge and records the resulting context snapshot.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..options.models import NormalizedOptions
from ..packages import PackageInfo
from .bridge import NodeBridge
from .contexts import RuntimeContext, save_runtime_contexts
from .scripts import BUILD_SCRIPT

logger = logging.getLogger(__name__)


@dataclass
class ExecutionOptions:
    cwd: str
    config: Optional[str] = None
    postcss_plugin: Optional[str] = None


def resolve_tailwind_execution_options(
    options: NormalizedOptions, major_version: int
) -> ExecutionOptions:
    """Pick the build inputs for a major version.

    ``tailwind.v2``/``tailwind.v3`` fields override the shared ``tailwind``
    fields, which override the project root.
    """
    base = options.tailwind
    sub = {2: base.v2, 3: base.v3}.get(major_version)

    if sub is not None:
        return ExecutionOptions(
            cwd=sub.cwd or base.cwd or options.project_root,
            config=sub.config or base.config,
            postcss_plugin=sub.postcss_plugin or base.postcss_plugin,
        )

    return ExecutionOptions(
        cwd=base.cwd or options.project_root,
        config=base.config,
        postcss_plugin=base.postcss_plugin,
    )


def run_tailwind_build(
    cwd: str,
    config: Optional[str],
    major_version: int,
    postcss_plugin: Optional[str],
    package_info: PackageInfo,
    ref_property: Optional[str],
    bridge: Optional[NodeBridge] = None,
) -> List[RuntimeContext]:
    """Run the PostCSS plugin once and snapshot the exposed contexts.

    Raises:
        BuildExecutionError: The Node process failed
    """
    bridge = bridge or NodeBridge()
    logger.info(f"Running Tailwind CSS v{major_version} build in {cwd}")

    result = bridge.run_script(
        BUILD_SCRIPT,
        {
            "cwd": cwd,
            "config": config,
            "majorVersion": major_version,
            "postcssPlugin": postcss_plugin,
            "packageRoot": package_info.root_path,
            "refProperty": ref_property,
        },
        cwd=cwd,
    )

    contexts = [
        RuntimeContext(
            class_cache=list(item.get("classCache") or []),
            candidate_rule_cache=list(item.get("candidateRuleCache") or []),
            ref_property=ref_property,
        )
        for item in (result or {}).get("contexts", [])
    ]
    if not contexts and ref_property:
        logger.warning(
            f"Tailwind build exposed no contexts under '{ref_property}'; "
            "run `tw-patch install` first"
        )

    save_runtime_contexts(package_info, major_version, contexts)
    return contexts
