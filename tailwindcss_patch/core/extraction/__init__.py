"""Token extraction: candidate scanning with file/line/column positions.

Public API:
    extract_project_candidates_with_positions(cwd, sources) → TokenReport
    group_tokens_by_file(report, key, strip_absolute_paths) → TokenByFileMap
    extract_raw_candidates_with_positions(content, extension) → [(candidate, start)]
    format_token_line(entry) → str
"""

from .extractor import (
    collect_project_candidates,
    extract_project_candidates_with_positions,
    extract_raw_candidates,
    extract_raw_candidates_with_positions,
    format_grouped_preview,
    format_token_line,
    group_tokens_by_file,
)
from .models import SkippedFile, SourceEntry, TokenByFileMap, TokenLocation, TokenReport
from .utils import detect_language

__all__ = [
    "collect_project_candidates",
    "extract_project_candidates_with_positions",
    "extract_raw_candidates",
    "extract_raw_candidates_with_positions",
    "format_grouped_preview",
    "format_token_line",
    "group_tokens_by_file",
    "detect_language",
    "SkippedFile",
    "SourceEntry",
    "TokenByFileMap",
    "TokenLocation",
    "TokenReport",
]
