"""Runtime patches for the installed Tailwind package."""

from .patches import TextPatch, expose_context_patch, extend_length_units_patch, return_context_patch
from .runner import PatchReport, PatchResult, apply_tailwind_patches, select_patches

__all__ = [
    "TextPatch",
    "expose_context_patch",
    "extend_length_units_patch",
    "return_context_patch",
    "PatchReport",
    "PatchResult",
    "apply_tailwind_patches",
    "select_patches",
]
