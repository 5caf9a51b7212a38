"""Base interface for candidate scanners.

Scanners turn the text of one file into ``(candidate, start)`` pairs where
``start`` is a character offset into that text. Tree-sitter scanners only
look inside string-ish nodes (string literals, template strings, JSX text)
so identifiers and comments of script files are not reported.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

import tree_sitter

from .candidates import find_candidates

logger = logging.getLogger(__name__)


class BaseCandidateScanner(ABC):
    """Abstract base for per-language candidate scanners."""

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'javascript', 'markup')."""
        ...

    @abstractmethod
    def scan_source(self, source_text: str) -> List[Tuple[str, int]]:
        """Return candidates found in ``source_text`` with their start offsets."""
        ...


class TreeSitterCandidateScanner(BaseCandidateScanner):
    """Shared tree-sitter walk for script languages.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    """

    # Nodes whose inner text is scanned whole
    TEXT_NODE_TYPES = frozenset({"string", "jsx_text"})
    # Nodes scanned between their substitutions
    TEMPLATE_NODE_TYPES = frozenset({"template_string"})
    SUBSTITUTION_NODE_TYPES = frozenset({"template_substitution"})
    SKIP_NODE_TYPES = frozenset({"comment"})

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    def scan_source(self, source_text: str) -> List[Tuple[str, int]]:
        source = source_text.encode("utf-8")
        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source)

        if tree.root_node.has_error:
            logger.debug(f"tree-sitter ({self.get_language()}) reported syntax errors, scanning best effort")

        to_char = _byte_to_char_mapper(source, source_text)
        found: List[Tuple[str, int]] = []
        for start_byte, end_byte in self._text_ranges(tree):
            if end_byte <= start_byte:
                continue
            segment = source[start_byte:end_byte].decode("utf-8", errors="replace")
            found.extend(find_candidates(segment, to_char(start_byte)))

        found.sort(key=lambda item: item[1])
        return found

    def _text_ranges(self, tree: tree_sitter.Tree) -> Iterator[Tuple[int, int]]:
        """Yield byte ranges of string content, in document order."""
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type in self.SKIP_NODE_TYPES:
                continue
            if node.type in self.TEXT_NODE_TYPES:
                yield self._inner_range(node)
                continue
            if node.type in self.TEMPLATE_NODE_TYPES:
                yield from self._template_ranges(node)
                # Substitutions may contain nested strings
                stack.extend(
                    child for child in reversed(node.children)
                    if child.type in self.SUBSTITUTION_NODE_TYPES
                )
                continue
            stack.extend(reversed(node.children))

    @staticmethod
    def _inner_range(node: tree_sitter.Node) -> Tuple[int, int]:
        if node.type == "string" and node.end_byte - node.start_byte >= 2:
            return node.start_byte + 1, node.end_byte - 1
        return node.start_byte, node.end_byte

    def _template_ranges(self, node: tree_sitter.Node) -> Iterator[Tuple[int, int]]:
        cursor = node.start_byte + 1  # opening backtick
        for child in node.children:
            if child.type in self.SUBSTITUTION_NODE_TYPES:
                yield cursor, child.start_byte
                cursor = child.end_byte
        yield cursor, node.end_byte - 1  # closing backtick


def _byte_to_char_mapper(source: bytes, text: str):
    """Build a byte-offset -> character-offset converter for ``source``."""
    if len(source) == len(text):
        return lambda offset: offset

    mapping = [0] * (len(source) + 1)
    byte_pos = 0
    for char_pos, char in enumerate(text):
        width = len(char.encode("utf-8"))
        for i in range(width):
            mapping[byte_pos + i] = char_pos
        byte_pos += width
    mapping[byte_pos] = len(text)
    return lambda offset: mapping[offset]
