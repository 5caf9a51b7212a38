"""Token extraction data models.

Pure data containers for scanned candidates. No scanning logic here.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class SourceEntry:
    """A glob rooted at a base directory, optionally excluding its matches."""

    base: str
    pattern: str = "**/*"
    negated: bool = False


@dataclass(frozen=True)
class TokenLocation:
    """One candidate occurrence in a source file.

    ``start``/``end`` are 0-based character offsets into the decoded file
    content (``end`` exclusive), ``line``/``column`` are 1-based.
    """

    raw_candidate: str
    file: str  # Absolute path
    relative_file: str  # POSIX path relative to the scan cwd
    extension: str
    start: int
    end: int
    length: int
    line: int
    column: int
    line_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SkippedFile:
    """A file the scan could not process."""

    file: str
    reason: str


@dataclass
class TokenReport:
    """Result of one project scan. Not cached."""

    entries: List[TokenLocation] = field(default_factory=list)
    files_scanned: int = 0
    skipped_files: List[SkippedFile] = field(default_factory=list)
    sources: List[SourceEntry] = field(default_factory=list)
    cwd: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "files_scanned": self.files_scanned,
            "skipped_files": [asdict(skipped) for skipped in self.skipped_files],
            "sources": [asdict(source) for source in self.sources],
        }


TokenByFileMap = Dict[str, List[TokenLocation]]
