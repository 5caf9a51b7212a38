"""Canonical options model.

Every field is resolved by ``normalize_options``; optional fields are
explicitly ``None``. Instances are frozen and shared by reference.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..extraction.models import SourceEntry


@dataclass(frozen=True)
class ResolveOptions:
    """Search roots for locating the Tailwind package."""

    paths: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class VersionExecutionOptions:
    """Per-major-version overrides for the v2/v3 build prerequisite."""

    cwd: Optional[str] = None
    config: Optional[str] = None
    postcss_plugin: Optional[str] = None


@dataclass(frozen=True)
class V4Options:
    """Inputs for the v4 design-system collector."""

    base: str
    css: Optional[str] = None
    css_entries: List[str] = field(default_factory=list)
    sources: List[SourceEntry] = field(default_factory=list)


@dataclass(frozen=True)
class TailwindOptions:
    package_name: str
    resolve: ResolveOptions
    cwd: str
    v4: V4Options
    version_hint: Optional[int] = None
    config: Optional[str] = None
    postcss_plugin: Optional[str] = None
    v2: Optional[VersionExecutionOptions] = None
    v3: Optional[VersionExecutionOptions] = None


@dataclass(frozen=True)
class CacheOptions:
    enabled: bool
    cwd: str
    dir: str
    file: str
    path: str  # dir/file
    strategy: str  # "merge" | "overwrite"


@dataclass(frozen=True)
class OutputOptions:
    enabled: bool
    file: str  # Absolute
    format: str  # "json" | "lines"
    pretty: object  # False or indent width (int)
    remove_universal_selector: bool


@dataclass(frozen=True)
class ExposeContextOptions:
    enabled: bool = True
    ref_property: str = "contextRef"


@dataclass(frozen=True)
class ExtendLengthUnitsOptions:
    enabled: bool = True
    units: List[str] = field(default_factory=lambda: ["rpx"])
    overwrite: bool = True


@dataclass(frozen=True)
class FeatureOptions:
    expose_context: ExposeContextOptions
    extend_length_units: Optional[ExtendLengthUnitsOptions] = None


@dataclass(frozen=True)
class NormalizedOptions:
    """Fully-defaulted configuration shared by every component."""

    project_root: str
    overwrite: bool
    tailwind: TailwindOptions
    cache: CacheOptions
    output: OutputOptions
    features: FeatureOptions
    filter: Callable[[str], bool]

    @property
    def context_ref_property(self) -> Optional[str]:
        """Reference name the runtime exposes its contexts under, if enabled."""
        expose = self.features.expose_context
        return expose.ref_property if expose.enabled else None
