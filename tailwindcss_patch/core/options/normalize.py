"""Options normalization.

Turns a partial option dict (current shape) into a ``NormalizedOptions``.
Absent keys and keys explicitly set to ``None`` are treated the same way:
both receive the documented default. No I/O happens here.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Optional

from ..constants import (
    CACHE_STRATEGIES,
    CACHE_STRATEGY_MERGE,
    DEFAULT_CACHE_FILE,
    DEFAULT_CACHE_SUBDIR,
    DEFAULT_CONTEXT_REF_PROPERTY,
    DEFAULT_EXTRA_LENGTH_UNITS,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PACKAGE_NAME,
    DEFAULT_PRETTY_INDENT,
    DEFAULT_SOURCE_PATTERN,
    OUTPUT_FORMAT_JSON,
    OUTPUT_FORMATS,
    SUPPORTED_MAJOR_VERSIONS,
)
from ..extraction.models import SourceEntry
from .models import (
    CacheOptions,
    ExposeContextOptions,
    ExtendLengthUnitsOptions,
    FeatureOptions,
    NormalizedOptions,
    OutputOptions,
    ResolveOptions,
    TailwindOptions,
    V4Options,
    VersionExecutionOptions,
)

logger = logging.getLogger(__name__)


def _pick(value: Any, default: Any) -> Any:
    return default if value is None else value


def _resolve_path(path: Optional[str], base: str) -> Optional[str]:
    if path is None:
        return None
    return os.path.normpath(os.path.join(base, os.path.expanduser(path)))


def normalize_options(options: Optional[Dict[str, Any]] = None) -> NormalizedOptions:
    """Produce the canonical options structure from a partial dict.

    Args:
        options: Option dict in the current shape (see ``from_legacy_options``
            for the legacy one). ``None`` means all defaults.

    Returns:
        Frozen NormalizedOptions with every required field populated
    """
    options = options or {}
    project_root = os.path.abspath(_pick(options.get("cwd"), os.getcwd()))

    output = _normalize_output(options.get("output"), project_root)
    return NormalizedOptions(
        project_root=project_root,
        overwrite=bool(_pick(options.get("overwrite"), True)),
        tailwind=_normalize_tailwind(options.get("tailwind"), project_root),
        cache=_normalize_cache(options.get("cache"), project_root),
        output=output,
        features=_normalize_features(options.get("features")),
        filter=_build_filter(options.get("filter"), output.remove_universal_selector),
    )


# =========================================================================
# Sections
# =========================================================================


def _normalize_output(output: Optional[Dict[str, Any]], project_root: str) -> OutputOptions:
    output = output or {}

    fmt = _pick(output.get("format"), OUTPUT_FORMAT_JSON)
    if fmt not in OUTPUT_FORMATS:
        logger.warning(f"Unknown output format '{fmt}', falling back to json")
        fmt = OUTPUT_FORMAT_JSON

    pretty = output.get("pretty")
    if pretty is True:
        pretty = DEFAULT_PRETTY_INDENT
    elif not isinstance(pretty, int) or isinstance(pretty, bool) or pretty <= 0:
        pretty = False

    return OutputOptions(
        enabled=bool(_pick(output.get("enabled"), True)),
        file=_resolve_path(_pick(output.get("file"), DEFAULT_OUTPUT_FILE), project_root),
        format=fmt,
        pretty=pretty,
        remove_universal_selector=bool(_pick(output.get("remove_universal_selector"), True)),
    )


def _normalize_cache(cache: Any, project_root: str) -> CacheOptions:
    if cache is True:
        cache = {"enabled": True}
    elif cache is None or cache is False:
        cache = {"enabled": False}

    enabled = bool(_pick(cache.get("enabled"), True))
    cache_cwd = _resolve_path(_pick(cache.get("cwd"), project_root), project_root)
    cache_dir = _resolve_path(
        _pick(cache.get("dir"), DEFAULT_CACHE_SUBDIR), cache_cwd
    )
    cache_file = _pick(cache.get("file"), DEFAULT_CACHE_FILE)

    strategy = _pick(cache.get("strategy"), CACHE_STRATEGY_MERGE)
    if strategy not in CACHE_STRATEGIES:
        logger.warning(f"Unknown cache strategy '{strategy}', falling back to merge")
        strategy = CACHE_STRATEGY_MERGE

    return CacheOptions(
        enabled=enabled,
        cwd=cache_cwd,
        dir=cache_dir,
        file=cache_file,
        path=os.path.join(cache_dir, cache_file),
        strategy=strategy,
    )


def _normalize_execution(
    sub: Optional[Dict[str, Any]], project_root: str
) -> Optional[VersionExecutionOptions]:
    if not sub:
        return None
    return VersionExecutionOptions(
        cwd=_resolve_path(sub.get("cwd"), project_root),
        config=sub.get("config"),
        postcss_plugin=sub.get("postcss_plugin"),
    )


def _normalize_sources(sources: Optional[List[Any]], base: str) -> List[SourceEntry]:
    if not sources:
        return [SourceEntry(base=base, pattern=DEFAULT_SOURCE_PATTERN, negated=False)]

    entries: List[SourceEntry] = []
    for source in sources:
        if isinstance(source, SourceEntry):
            entries.append(SourceEntry(
                base=_resolve_path(source.base, base),
                pattern=source.pattern,
                negated=source.negated,
            ))
        elif isinstance(source, str):
            negated = source.startswith("!")
            entries.append(SourceEntry(
                base=base,
                pattern=source[1:] if negated else source,
                negated=negated,
            ))
        else:
            entries.append(SourceEntry(
                base=_resolve_path(_pick(source.get("base"), base), base),
                pattern=_pick(source.get("pattern"), DEFAULT_SOURCE_PATTERN),
                negated=bool(source.get("negated", False)),
            ))
    return entries


def _normalize_v4(v4: Optional[Dict[str, Any]], project_root: str) -> V4Options:
    v4 = v4 or {}
    base = _resolve_path(_pick(v4.get("base"), project_root), project_root)
    css_entries = [_resolve_path(entry, base) for entry in (v4.get("css_entries") or [])]
    return V4Options(
        base=base,
        css=v4.get("css"),
        css_entries=css_entries,
        sources=_normalize_sources(v4.get("sources"), base),
    )


def _normalize_tailwind(tailwind: Optional[Dict[str, Any]], project_root: str) -> TailwindOptions:
    tailwind = tailwind or {}

    version_hint = tailwind.get("version")
    if version_hint not in SUPPORTED_MAJOR_VERSIONS:
        version_hint = None

    resolve = tailwind.get("resolve") or {}
    paths = [_resolve_path(p, project_root) for p in (resolve.get("paths") or [])]

    return TailwindOptions(
        package_name=_pick(tailwind.get("package_name"), DEFAULT_PACKAGE_NAME),
        resolve=ResolveOptions(paths=paths or [project_root]),
        cwd=_resolve_path(_pick(tailwind.get("cwd"), project_root), project_root),
        v4=_normalize_v4(tailwind.get("v4"), project_root),
        version_hint=version_hint,
        config=tailwind.get("config"),
        postcss_plugin=tailwind.get("postcss_plugin"),
        v2=_normalize_execution(tailwind.get("v2"), project_root),
        v3=_normalize_execution(tailwind.get("v3"), project_root),
    )


def _normalize_features(features: Optional[Dict[str, Any]]) -> FeatureOptions:
    features = features or {}

    expose = features.get("expose_context")
    if expose is None or expose is True:
        expose_context = ExposeContextOptions(enabled=True, ref_property=DEFAULT_CONTEXT_REF_PROPERTY)
    elif expose is False:
        expose_context = ExposeContextOptions(enabled=False, ref_property=DEFAULT_CONTEXT_REF_PROPERTY)
    else:
        expose_context = ExposeContextOptions(
            enabled=bool(_pick(expose.get("enabled"), True)),
            ref_property=_pick(expose.get("ref_property"), DEFAULT_CONTEXT_REF_PROPERTY),
        )

    extend = features.get("extend_length_units")
    if extend is None or extend is False:
        extend_length_units = None
    elif extend is True:
        extend_length_units = ExtendLengthUnitsOptions(
            enabled=True, units=list(DEFAULT_EXTRA_LENGTH_UNITS), overwrite=True
        )
    else:
        extend_length_units = ExtendLengthUnitsOptions(
            enabled=bool(_pick(extend.get("enabled"), True)),
            units=list(_pick(extend.get("units"), DEFAULT_EXTRA_LENGTH_UNITS)),
            overwrite=bool(_pick(extend.get("overwrite"), True)),
        )
        if not extend_length_units.enabled:
            extend_length_units = None

    return FeatureOptions(expose_context=expose_context, extend_length_units=extend_length_units)


def _build_filter(
    user_filter: Optional[Callable[[str], Any]], remove_universal_selector: bool
) -> Callable[[str], bool]:
    def class_filter(class_name: str) -> bool:
        if remove_universal_selector and class_name == "*":
            return False
        if callable(user_filter):
            return user_filter(class_name) is not False
        return True

    return class_filter
