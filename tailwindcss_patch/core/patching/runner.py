"""Applies the runtime patches a Tailwind major version needs."""

import logging
import os
from dataclasses import dataclass, field
from typing import List

from ..errors import PatchApplicationError
from ..options.models import NormalizedOptions
from ..packages import PackageInfo
from .patches import TextPatch, expose_context_patch, extend_length_units_patch, return_context_patch

logger = logging.getLogger(__name__)

STATUS_APPLIED = "applied"
STATUS_ALREADY_APPLIED = "already-applied"
STATUS_PENDING = "pending"

_CONTEXT_FILES = {
    2: ("lib/jit/processTailwindFeatures.js", "lib/jit/index.js"),
    3: ("lib/processTailwindFeatures.js", "lib/plugin.js"),
}


@dataclass
class PatchResult:
    name: str
    file: str
    status: str


@dataclass
class PatchReport:
    """Outcome of one ``apply_tailwind_patches`` call."""

    major_version: int
    results: List[PatchResult] = field(default_factory=list)
    files_written: List[str] = field(default_factory=list)

    @property
    def applied(self) -> List[str]:
        return [r.name for r in self.results if r.status == STATUS_APPLIED]

    @property
    def pending(self) -> List[str]:
        return [r.name for r in self.results if r.status == STATUS_PENDING]


def select_patches(options: NormalizedOptions, major_version: int) -> List[TextPatch]:
    """Patches required by the enabled features for a major version."""
    patches: List[TextPatch] = []
    features = options.features

    if major_version in _CONTEXT_FILES and features.expose_context.enabled:
        process_file, plugin_file = _CONTEXT_FILES[major_version]
        patches.append(return_context_patch(process_file))
        patches.append(expose_context_patch(plugin_file, features.expose_context.ref_property))

    length_units = features.extend_length_units
    if length_units is not None and length_units.enabled and length_units.units:
        if major_version == 3:
            patches.append(extend_length_units_patch(list(length_units.units)))
        else:
            logger.warning(
                f"extend_length_units is not supported for Tailwind CSS v{major_version}; skipping"
            )

    return patches


def apply_tailwind_patches(
    package_info: PackageInfo, options: NormalizedOptions, major_version: int
) -> PatchReport:
    """Patch the installed Tailwind runtime in place.

    With ``options.overwrite`` False nothing is written; patches that would
    change a file are reported as pending.

    Raises:
        PatchApplicationError: A target file or anchor is missing
    """
    report = PatchReport(major_version=major_version)
    patches = select_patches(options, major_version)
    if not patches:
        logger.info(f"No runtime patches required for Tailwind CSS v{major_version}")
        return report

    by_file = {}
    for patch in patches:
        by_file.setdefault(patch.relative_path, []).append(patch)

    for relative_path, file_patches in by_file.items():
        path = os.path.join(package_info.root_path, relative_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise PatchApplicationError(f"Cannot read {path}: {e}") from e

        modified = False
        for patch in file_patches:
            patched = patch.apply(content)
            if patched is None:
                logger.debug(f"{patch.name}: already applied to {relative_path}")
                report.results.append(PatchResult(patch.name, path, STATUS_ALREADY_APPLIED))
                continue
            content = patched
            modified = True
            status = STATUS_APPLIED if options.overwrite else STATUS_PENDING
            report.results.append(PatchResult(patch.name, path, status))

        if modified and options.overwrite:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
            report.files_written.append(path)
            logger.info(f"Patched {relative_path} ({package_info.name}@{package_info.version})")
        elif modified:
            logger.info(f"Would patch {relative_path}; overwrite is disabled")

    return report
