"""TypeScript candidate scanners using tree-sitter.

``.ts`` and ``.tsx`` need different grammars: plain TypeScript treats
``<div>`` as a type assertion, so JSX sources go through the TSX grammar.
"""

import tree_sitter
import tree_sitter_typescript

from .base import TreeSitterCandidateScanner

_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())


class TypeScriptScanner(TreeSitterCandidateScanner):
    """Scans string literals and template strings of TypeScript files.

    ``template_literal_type`` nodes are skipped: they describe types, not
    runtime strings.
    """

    SKIP_NODE_TYPES = frozenset({"comment", "template_literal_type"})

    def get_language(self) -> str:
        return "typescript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TS_LANGUAGE


class TsxScanner(TypeScriptScanner):
    """TypeScript scanner for files containing JSX."""

    def get_language(self) -> str:
        return "tsx"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TSX_LANGUAGE
