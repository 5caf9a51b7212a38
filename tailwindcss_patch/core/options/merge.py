"""Deep merge of layered option dicts."""

import copy
from typing import Any, Dict, Optional


def merge_options(*layers: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge option layers, earlier layers taking precedence.

    Nested dicts merge recursively. ``None`` values never override a
    value from a later layer. Lists and scalars are taken whole from the
    first layer that defines them.

    Example:
        merge_options({"output": {"file": "a.json"}}, {"output": {"file": "b.json", "pretty": 2}})
        -> {"output": {"file": "a.json", "pretty": 2}}
    """
    merged: Dict[str, Any] = {}
    for layer in reversed(layers):
        if not layer:
            continue
        merged = _merge_into(merged, layer)
    return merged


def _merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if value is None:
            result.setdefault(key, None)
            continue
        current = result.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            result[key] = _merge_into(current, value)
        elif isinstance(value, dict):
            result[key] = _merge_into({}, value)
        else:
            result[key] = copy.copy(value) if isinstance(value, list) else value
    return result
