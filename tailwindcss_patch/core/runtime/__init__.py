"""Tailwind runtime access: Node bridge, build prerequisite, class collectors."""

from .bridge import NodeBridge
from .build import ExecutionOptions, resolve_tailwind_execution_options, run_tailwind_build
from .collector import (
    ClassCollector,
    DesignSystemCollector,
    LegacyContextCollector,
    collect_classes_from_contexts,
    collect_classes_from_tailwind_v4,
    get_collector,
    validate_candidates,
)
from .contexts import RuntimeContext, context_snapshot_path, load_runtime_contexts, save_runtime_contexts

__all__ = [
    "NodeBridge",
    "ExecutionOptions",
    "resolve_tailwind_execution_options",
    "run_tailwind_build",
    "ClassCollector",
    "DesignSystemCollector",
    "LegacyContextCollector",
    "collect_classes_from_contexts",
    "collect_classes_from_tailwind_v4",
    "get_collector",
    "validate_candidates",
    "RuntimeContext",
    "context_snapshot_path",
    "load_runtime_contexts",
    "save_runtime_contexts",
]
