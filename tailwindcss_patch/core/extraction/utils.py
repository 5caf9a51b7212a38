"""Token extraction utilities.

Language detection, scanner registry, and directory filtering.
"""

import os
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseCandidateScanner

# Extension → language mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    # Whole-text scanning
    ".html": "markup",
    ".htm": "markup",
    ".vue": "markup",
    ".svelte": "markup",
    ".astro": "markup",
    ".md": "markup",
    ".mdx": "markup",
    ".php": "markup",
    ".twig": "markup",
    ".erb": "markup",
    ".hbs": "markup",
    ".njk": "markup",
    ".liquid": "markup",
    ".pug": "markup",
    ".css": "markup",
    ".scss": "markup",
    ".sass": "markup",
    ".less": "markup",
    ".wxml": "markup",
}

# Directories to skip during file walking
SKIP_DIRECTORIES = frozenset({
    "node_modules",
    ".git",
    ".hg",
    ".svn",
    "dist",
    "build",
    "coverage",
    ".next",
    ".nuxt",
    ".svelte-kit",
    ".output",
    ".turbo",
    ".cache",
    ".tw-patch",
    "__pycache__",
    ".venv",
    "venv",
})

# Scanner registry, lazy-loaded to avoid loading grammars that are never used
_scanner_registry: Dict[str, "BaseCandidateScanner"] = {}


def detect_language(file_path: str) -> Optional[str]:
    """Detect the scanner language from a file extension.

    Returns:
        Language identifier string or None if the file is not scanned
    """
    _, ext = os.path.splitext(file_path)
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_scanner(language: str) -> "BaseCandidateScanner":
    """Get a scanner instance for the given language.

    Raises:
        ValueError: If language is not supported
    """
    if language not in _scanner_registry:
        if language == "javascript":
            from .javascript_scanner import JavaScriptScanner
            _scanner_registry["javascript"] = JavaScriptScanner()
        elif language == "typescript":
            from .typescript_scanner import TypeScriptScanner
            _scanner_registry["typescript"] = TypeScriptScanner()
        elif language == "tsx":
            from .typescript_scanner import TsxScanner
            _scanner_registry["tsx"] = TsxScanner()
        elif language == "markup":
            from .fallback_scanner import FallbackScanner
            _scanner_registry["markup"] = FallbackScanner()
        else:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported: {sorted(set(SUPPORTED_EXTENSIONS.values()))}"
            )

    return _scanner_registry[language]


def should_skip_directory(dir_name: str) -> bool:
    """Check if a directory should be skipped during file walking."""
    return dir_name in SKIP_DIRECTORIES or dir_name.startswith(".")
