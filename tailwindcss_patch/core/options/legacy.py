"""Adapters from older option shapes into the current one.

Both adapters are total: any dict (or ``None``) produces a current-shape
dict ready for ``normalize_options``. Shape detection happens before
normalization, never inside it.
"""

from typing import Any, Dict, Optional


def is_legacy_options(options: Any) -> bool:
    """Legacy option dicts carry a top-level ``patch`` key."""
    return isinstance(options, dict) and "patch" in options


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def from_legacy_options(options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Convert a legacy ``{"patch": {...}, "cache": ...}`` dict.

    Field mapping:
        patch.output.filename                -> output.file
        patch.output.loose                   -> output.pretty (2 or False)
        patch.output.remove_universal_selector -> output.remove_universal_selector
        patch.tailwindcss.version/v2/v3/v4   -> tailwind.version/v2/v3/v4
        patch.apply_patches.export_context   -> features.expose_context
        patch.apply_patches.extend_length_units -> features.extend_length_units
        cache.dir/file, patch.cache.dir/file -> cache.dir/file (enabled=True)
    """
    if not options:
        return {}

    patch = options.get("patch") or {}
    converted: Dict[str, Any] = {}

    for key in ("cwd", "overwrite", "filter"):
        if patch.get(key) is not None:
            converted[key] = patch[key]

    legacy_output = patch.get("output")
    if legacy_output:
        pretty = None
        if "loose" in legacy_output:
            pretty = 2 if legacy_output["loose"] else False
        converted["output"] = _drop_none({
            "file": legacy_output.get("filename"),
            "pretty": pretty,
            "remove_universal_selector": legacy_output.get("remove_universal_selector"),
        })

    apply_patches = patch.get("apply_patches") or {}
    features = _drop_none({
        "expose_context": apply_patches.get("export_context"),
        "extend_length_units": apply_patches.get("extend_length_units"),
    })
    if features:
        converted["features"] = features

    legacy_tailwind = patch.get("tailwindcss") or {}
    if legacy_tailwind or patch.get("package_name") or patch.get("resolve"):
        v2 = legacy_tailwind.get("v2") or {}
        v3 = legacy_tailwind.get("v3") or {}
        converted["tailwind"] = _drop_none({
            "package_name": patch.get("package_name"),
            "resolve": patch.get("resolve"),
            "version": legacy_tailwind.get("version"),
            "cwd": legacy_tailwind.get("cwd") or v3.get("cwd") or v2.get("cwd"),
            "config": legacy_tailwind.get("config") or v3.get("config") or v2.get("config"),
            "v2": legacy_tailwind.get("v2"),
            "v3": legacy_tailwind.get("v3"),
            "v4": legacy_tailwind.get("v4"),
        })

    cache = options.get("cache")
    if cache is None:
        cache = patch.get("cache")
    if isinstance(cache, bool):
        converted["cache"] = cache
    elif isinstance(cache, dict):
        converted["cache"] = {**cache, "enabled": cache.get("enabled", True)}

    return converted


def from_unified_config(registry: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Convert the ``registry`` section of the unified config file.

    ``v2``/``v3``/``cwd``/``config`` are always present (possibly ``None``)
    in the returned ``tailwind`` section so that defaulting downstream is
    unambiguous.
    """
    if not registry:
        return {}

    converted: Dict[str, Any] = {}

    output = registry.get("output")
    if output is not None:
        converted["output"] = _drop_none({
            "file": output.get("file"),
            "pretty": output.get("pretty"),
            "remove_universal_selector": output.get("strip_universal_selector"),
        })

    tailwind = registry.get("tailwind")
    if tailwind is not None:
        converted["tailwind"] = {
            "version": tailwind.get("version"),
            "package_name": tailwind.get("package"),
            "resolve": tailwind.get("resolve"),
            "config": tailwind.get("config"),
            "cwd": tailwind.get("cwd"),
            "v2": tailwind.get("classic"),
            "v3": tailwind.get("legacy"),
            "v4": tailwind.get("next"),
        }

    return converted
