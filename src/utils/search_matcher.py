"""
Search matching for the resource list.

Three modes are supported:
- normal: case-insensitive substring, then pinyin, then pinyin initials
- glob: "*" and "?" wildcards, matched against the whole string
- regex: case-insensitive regular expression, matched anywhere

A pattern that cannot be compiled matches nothing.
"""

import logging
import re
from typing import Optional, Pattern

from src.utils.config import DEFAULT_SEARCH_MODE
from src.utils.phonetic_index import phonetic_contains

logger = logging.getLogger(__name__)

MODE_NORMAL = "normal"
MODE_GLOB = "glob"
MODE_REGEX = "regex"
SEARCH_MODES = (MODE_NORMAL, MODE_GLOB, MODE_REGEX)


class SearchQuery:
    """A search pattern together with its mode."""

    def __init__(self, pattern: str = "", mode: Optional[str] = None):
        mode = mode or DEFAULT_SEARCH_MODE
        if mode not in SEARCH_MODES:
            raise ValueError(f"Unknown search mode: {mode}")
        self.pattern = pattern or ""
        self.mode = mode

    @property
    def is_empty(self) -> bool:
        return self.pattern == ""

    def __repr__(self):
        return f"SearchQuery(pattern='{self.pattern}', mode='{self.mode}')"

    def __eq__(self, other):
        if not isinstance(other, SearchQuery):
            return False
        return self.pattern == other.pattern and self.mode == other.mode


def glob_to_regex(pattern: str) -> str:
    """
    Translate a glob pattern into an anchored regular expression.

    Only "*" (any run of characters) and "?" (exactly one character) are
    special; everything else is matched literally.
    """
    parts = []
    for char in pattern:
        if char == '*':
            parts.append('.*')
        elif char == '?':
            parts.append('.')
        else:
            parts.append(re.escape(char))
    return '^' + ''.join(parts) + '$'


def compile_query(query: SearchQuery) -> Optional[Pattern]:
    """
    Compile a glob or regex query.

    Returns:
        Compiled pattern, or None for normal mode and for invalid patterns
    """
    # Glob wildcards span any character, newlines included
    if query.mode == MODE_GLOB:
        source = glob_to_regex(query.pattern)
        flags = re.IGNORECASE | re.DOTALL
    elif query.mode == MODE_REGEX:
        source = query.pattern
        flags = re.IGNORECASE
    else:
        return None

    try:
        return re.compile(source, flags)
    except re.error as e:
        logger.debug(f"Invalid {query.mode} pattern '{query.pattern}': {e}")
        return None


def _matches_normal(candidate: str, pattern: str) -> bool:
    if pattern.lower() in candidate.lower():
        return True
    return phonetic_contains(candidate, pattern)


def matches(candidate: Optional[str], query: SearchQuery, compiled: Optional[Pattern] = None) -> bool:
    """
    Decide whether a candidate string matches a query.

    Args:
        candidate: Text to test (None is treated as empty)
        query: The search query
        compiled: Pre-compiled pattern from compile_query, to avoid
            recompiling for every candidate

    Returns:
        True on a match. An empty pattern matches everything.
    """
    if query.is_empty:
        return True
    candidate = candidate or ""

    if query.mode == MODE_NORMAL:
        return _matches_normal(candidate, query.pattern)

    if compiled is None:
        compiled = compile_query(query)
    if compiled is None:
        return False
    if query.mode == MODE_GLOB:
        return compiled.fullmatch(candidate) is not None
    return compiled.search(candidate) is not None
