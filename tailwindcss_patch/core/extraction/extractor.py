"""Project token extraction.

Orchestrates: sources → matching files → scan → TokenLocation records.
A file that cannot be read or scanned is recorded in ``skipped_files``
and the scan continues.
"""

import bisect
import logging
import os
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from pathspec import GitIgnoreSpec, PathSpec

from ..errors import RecoverableScanError
from .models import SkippedFile, SourceEntry, TokenByFileMap, TokenLocation, TokenReport
from .utils import detect_language, get_scanner, should_skip_directory

logger = logging.getLogger(__name__)

# Limits
MAX_FILE_SIZE_MB = 5

TOKEN_KEY_RELATIVE = "relative"
TOKEN_KEY_ABSOLUTE = "absolute"


# =========================================================================
# Single content
# =========================================================================


def extract_raw_candidates_with_positions(
    content: str, extension: str = "html"
) -> List[Tuple[str, int]]:
    """Scan a string as if it were a file with the given extension.

    Args:
        content: Source text
        extension: File extension with or without the leading dot

    Returns:
        List of (candidate, start) with character offsets into ``content``
    """
    language = detect_language(f"content.{extension.lstrip('.')}") or "markup"
    return get_scanner(language).scan_source(content)


def extract_raw_candidates(content: str, extension: str = "html") -> List[str]:
    return [candidate for candidate, _ in extract_raw_candidates_with_positions(content, extension)]


def _line_starts(text: str) -> List[int]:
    starts = [0]
    for i, char in enumerate(text):
        if char == "\n":
            starts.append(i + 1)
    return starts


def locate_candidates(
    text: str, candidates: Iterable[Tuple[str, int]], file_path: str, cwd: str
) -> List[TokenLocation]:
    """Attach file, line and column information to scanned candidates."""
    starts = _line_starts(text)
    relative = _relative_key(file_path, cwd)
    extension = os.path.splitext(file_path)[1].lstrip(".")

    locations: List[TokenLocation] = []
    for candidate, start in candidates:
        line_index = bisect.bisect_right(starts, start) - 1
        line_start = starts[line_index]
        line_end = starts[line_index + 1] - 1 if line_index + 1 < len(starts) else len(text)
        locations.append(TokenLocation(
            raw_candidate=candidate,
            file=file_path,
            relative_file=relative,
            extension=extension,
            start=start,
            end=start + len(candidate),
            length=len(candidate),
            line=line_index + 1,
            column=start - line_start + 1,
            line_text=text[line_start:line_end].rstrip("\r"),
        ))
    return locations


def scan_file(file_path: str, cwd: str) -> List[TokenLocation]:
    """Scan one file.

    Raises:
        RecoverableScanError: The file cannot be read, decoded or scanned
    """
    language = detect_language(file_path) or "markup"
    try:
        if os.path.getsize(file_path) > MAX_FILE_SIZE_MB * 1024 * 1024:
            raise RecoverableScanError(file_path, f"file larger than {MAX_FILE_SIZE_MB}MB")
        with open(file_path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise RecoverableScanError(file_path, str(e)) from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise RecoverableScanError(file_path, f"not valid UTF-8 ({e.reason})") from e

    try:
        candidates = get_scanner(language).scan_source(text)
    except Exception as e:
        raise RecoverableScanError(file_path, f"{language} scan failed: {e}") from e

    return locate_candidates(text, candidates, file_path, cwd)


# =========================================================================
# Project scan
# =========================================================================


def resolve_sources(cwd: str, sources: Optional[Sequence[SourceEntry]] = None) -> List[SourceEntry]:
    """Anchor relative source bases at ``cwd``; no sources means ``**/*``."""
    if not sources:
        return [SourceEntry(base=cwd)]
    return [
        SourceEntry(
            base=os.path.normpath(os.path.join(cwd, source.base)),
            pattern=source.pattern or "**/*",
            negated=source.negated,
        )
        for source in sources
    ]


def _gitignore_spec(cwd: str) -> Optional[GitIgnoreSpec]:
    path = os.path.join(cwd, ".gitignore")
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return GitIgnoreSpec.from_lines(f.read().splitlines())
    except OSError as e:
        logger.debug(f"Cannot read {path}: {e}")
        return None


def _matches(entry: SourceEntry, spec: PathSpec, file_path: str) -> bool:
    rel = os.path.relpath(file_path, entry.base)
    if rel.startswith(".."):
        return False
    return spec.match_file(rel.replace(os.sep, "/"))


def find_source_files(cwd: str, sources: Sequence[SourceEntry]) -> List[str]:
    """List files selected by the (already resolved) source entries.

    Negated entries remove matches of the positive ones. Dependency and
    build directories, files ignored by ``cwd/.gitignore`` and files with
    an unknown extension are never returned.
    """
    include = [(e, PathSpec.from_lines("gitwildmatch", [e.pattern])) for e in sources if not e.negated]
    exclude = [(e, PathSpec.from_lines("gitwildmatch", [e.pattern])) for e in sources if e.negated]
    ignore = _gitignore_spec(cwd)

    found: Set[str] = set()
    for entry, spec in include:
        if not os.path.isdir(entry.base):
            logger.debug(f"Source base does not exist: {entry.base}")
            continue
        for root, dirs, files in os.walk(entry.base):
            dirs[:] = [d for d in dirs if not should_skip_directory(d)]
            for name in files:
                file_path = os.path.join(root, name)
                if detect_language(name) is None:
                    continue
                if not _matches(entry, spec, file_path):
                    continue
                if any(_matches(neg, neg_spec, file_path) for neg, neg_spec in exclude):
                    continue
                if ignore is not None:
                    rel = os.path.relpath(file_path, cwd)
                    if not rel.startswith("..") and ignore.match_file(rel.replace(os.sep, "/")):
                        continue
                found.add(os.path.abspath(file_path))

    return sorted(found)


def extract_project_candidates_with_positions(
    cwd: str, sources: Optional[Sequence[SourceEntry]] = None
) -> TokenReport:
    """Scan project sources for candidates with positions.

    Args:
        cwd: Project directory; relative source bases and relative file
            names are computed against it
        sources: Source entries; defaults to every supported file under cwd

    Returns:
        TokenReport with entries in file order, then position order
    """
    cwd = os.path.abspath(cwd)
    resolved = resolve_sources(cwd, sources)
    report = TokenReport(sources=resolved, cwd=cwd)

    for file_path in find_source_files(cwd, resolved):
        try:
            entries = scan_file(file_path, cwd)
        except RecoverableScanError as e:
            logger.warning(f"Skipping {e.file_path}: {e.reason}")
            report.skipped_files.append(SkippedFile(file=e.file_path, reason=e.reason))
            continue
        report.files_scanned += 1
        report.entries.extend(entries)
        logger.debug(f"{len(entries)} candidates in {file_path}")

    logger.info(
        f"Scanned {report.files_scanned} files: {len(report.entries)} candidates, "
        f"{len(report.skipped_files)} skipped"
    )
    return report


def collect_project_candidates(
    cwd: str, sources: Optional[Sequence[SourceEntry]] = None
) -> Set[str]:
    """Unique candidate strings of a project scan."""
    report = extract_project_candidates_with_positions(cwd, sources)
    return {entry.raw_candidate for entry in report.entries}


# =========================================================================
# Grouping and formatting
# =========================================================================


def _relative_key(file_path: str, cwd: str) -> str:
    rel = os.path.relpath(file_path, cwd)
    if rel.startswith(".."):
        return file_path
    return rel.replace(os.sep, "/")


def group_tokens_by_file(
    report: TokenReport,
    key: Optional[str] = None,
    strip_absolute_paths: Optional[bool] = None,
) -> TokenByFileMap:
    """Group report entries by file, preserving order.

    Args:
        report: Report from ``extract_project_candidates_with_positions``
        key: "relative" (default) or "absolute" file identity
        strip_absolute_paths: Rewrite absolute keys relative to the scan cwd;
            defaults to True unless key is "absolute"

    Returns:
        Dict of file key → TokenLocation list
    """
    key = key or TOKEN_KEY_RELATIVE
    if strip_absolute_paths is None:
        strip_absolute_paths = key != TOKEN_KEY_ABSOLUTE

    grouped: Dict[str, List[TokenLocation]] = {}
    for entry in report.entries:
        file_key = entry.file if key == TOKEN_KEY_ABSOLUTE else entry.relative_file
        if strip_absolute_paths and os.path.isabs(file_key) and report.cwd:
            file_key = os.path.relpath(file_key, report.cwd).replace(os.sep, "/")
        grouped.setdefault(file_key, []).append(entry)
    return grouped


def format_token_line(entry: TokenLocation) -> str:
    return f"{entry.relative_file}:{entry.line}:{entry.column} {entry.raw_candidate} ({entry.start}-{entry.end})"


def format_grouped_preview(grouped: TokenByFileMap, limit: int = 3) -> Tuple[str, int]:
    """Summarize the first ``limit`` files of a grouped map.

    Returns:
        (preview text, number of files not shown)
    """
    files = list(grouped)
    lines = []
    for file_key in files[:limit]:
        tokens = grouped[file_key]
        sample = ", ".join(token.raw_candidate for token in tokens[:3])
        suffix = ", …" if len(tokens) > 3 else ""
        lines.append(f"{file_key}: {len(tokens)} tokens ({sample}{suffix})")
    return "\n".join(lines), max(0, len(files) - limit)
