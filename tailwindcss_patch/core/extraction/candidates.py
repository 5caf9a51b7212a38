"""Candidate primitive.

Finds utility-class-looking runs in a piece of text. Arbitrary values in
square brackets (``bg-[#fff]``, ``w-[calc(100%-1rem)]``) are kept whole.
Validation against Tailwind's design system happens elsewhere; this only
decides what *could* be a class.
"""

import re
from typing import List, Tuple

# A run of non-delimiter characters; bracket groups may contain delimiters
_RAW_TOKEN_RE = re.compile(r"""(?:\[[^\s\[\]]*\]|[^\s"'`<>{}();=,\\\[\]])+""")

_CANDIDATE_RE = re.compile(r"^[!\-]?(?:[a-z@*]|\[|\d+[a-z]+:)[^\s]*$")
_HAS_LETTER_RE = re.compile(r"[A-Za-z]")

_TRAILING_PUNCTUATION = ".:"
MAX_CANDIDATE_LENGTH = 256


def is_candidate(token: str) -> bool:
    """Return True if ``token`` has the shape of a utility class."""
    if not token or len(token) > MAX_CANDIDATE_LENGTH:
        return False
    if not _CANDIDATE_RE.match(token) or not _HAS_LETTER_RE.search(token):
        return False
    if "//" in token or ".." in token:
        return False
    if token.endswith(("-", "/")):
        return False
    return True


def find_candidates(text: str, offset: int = 0) -> List[Tuple[str, int]]:
    """Find candidate runs in ``text``.

    Args:
        text: Text to scan
        offset: Added to every returned start position

    Returns:
        List of (candidate, start) in order of appearance
    """
    found: List[Tuple[str, int]] = []
    for match in _RAW_TOKEN_RE.finditer(text):
        token = match.group(0).rstrip(_TRAILING_PUNCTUATION)
        if is_candidate(token):
            found.append((token, match.start() + offset))
    return found
