"""JavaScript candidate scanner using tree-sitter.

The JavaScript grammar includes JSX, so ``.jsx`` files share this scanner.
"""

import tree_sitter
import tree_sitter_javascript

from .base import TreeSitterCandidateScanner

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())


class JavaScriptScanner(TreeSitterCandidateScanner):
    """Scans string literals, template strings and JSX text of JS/JSX files."""

    def get_language(self) -> str:
        return "javascript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _JS_LANGUAGE
