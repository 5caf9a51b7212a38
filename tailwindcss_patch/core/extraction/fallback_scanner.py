"""Fallback scanner for markup, style and template files.

No grammar: the whole text is scanned. Used for HTML, Vue, Svelte,
Markdown, CSS and similar files where classes can appear anywhere.
"""

from typing import List, Tuple

from .base import BaseCandidateScanner
from .candidates import find_candidates


class FallbackScanner(BaseCandidateScanner):
    """Whole-text candidate scanner."""

    def get_language(self) -> str:
        return "markup"

    def scan_source(self, source_text: str) -> List[Tuple[str, int]]:
        return find_candidates(source_text)
