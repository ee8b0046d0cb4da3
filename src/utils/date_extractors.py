"""
Regex-based extractors for expiry date input.

Parses free-form date strings pasted from cloud consoles, invoices and
spreadsheets into a calendar date.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional, Union

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

# Accepted year range for any parsed date
MIN_YEAR = 1970
MAX_YEAR = 2100


# ============================================================================
# COMMON REGEX BUILDING BLOCKS
# ============================================================================

# Year: 4 digits
YEAR = r'(\d{4})'

# Month and day: 1 or 2 digits
MONTH = r'(\d{1,2})'
DAY = r'(\d{1,2})'

# Time of day (parsed but discarded)
TIME = r'(\d{1,2}):(\d{1,2}):(\d{1,2})'

# Date separator: dash or slash
DATE_SEP = r'[-/]'


# ============================================================================
# PATTERN TABLE (order matters: first structural match wins)
# ============================================================================

# Each entry is (name, compiled pattern, group order). Group order gives the
# positions of (year, month, day) in the match groups.
YMD = (1, 2, 3)
MDY = (3, 1, 2)

DATE_PATTERNS = [
    # ISO-like with time: 2026-04-16T23:59:59
    ('iso_datetime', re.compile(rf'^{YEAR}-{MONTH}-{DAY}(?:T|\s){TIME}', re.ASCII), YMD),
    # Slash with time: 2026/04/16 23:59:59 GMT+08:00
    ('slash_datetime', re.compile(rf'^{YEAR}/{MONTH}/{DAY}\s+{TIME}', re.ASCII), YMD),
    # Dash with time: 2026-04-16 23:59:59 GMT+08:00
    ('dash_datetime', re.compile(rf'^{YEAR}-{MONTH}-{DAY}\s+{TIME}', re.ASCII), YMD),
    # Mixed separators with time: 2026-04/16 23:59:59
    ('mixed_datetime', re.compile(rf'^{YEAR}{DATE_SEP}{MONTH}{DATE_SEP}{DAY}\s+{TIME}', re.ASCII), YMD),
    # Date only: 2026-04-16 or 2026/04/16
    ('date_only', re.compile(rf'^{YEAR}{DATE_SEP}{MONTH}{DATE_SEP}{DAY}$', re.ASCII), YMD),
    # CJK markers: 2026年04月16日
    ('cjk_date', re.compile(rf'^{YEAR}年{MONTH}月{DAY}日', re.ASCII), YMD),
    # US month first: 04/16/2026
    ('us_date', re.compile(rf'^{MONTH}/{DAY}/{YEAR}$', re.ASCII), MDY),
]

# Fallback default for fields the generic parser cannot find in the input
FALLBACK_DEFAULT = datetime(MIN_YEAR, 1, 1)


class ParseFailure:
    """Represents a failed date parse with a reason code."""

    EMPTY = "EMPTY"
    UNRECOGNIZED = "UNRECOGNIZED"

    def __init__(self, code: str, text: str = ""):
        """
        Initialize a parse failure.

        Args:
            code: EMPTY for blank input, UNRECOGNIZED for anything else
            text: The trimmed input that failed to parse
        """
        self.code = code
        self.text = text

    @property
    def is_empty(self) -> bool:
        """True when the input was blank, meaning no date was selected."""
        return self.code == self.EMPTY

    def __bool__(self):
        return False

    def __repr__(self):
        return f"ParseFailure(code='{self.code}', text='{self.text}')"

    def __eq__(self, other):
        if not isinstance(other, ParseFailure):
            return False
        return self.code == other.code


def build_date(year: int, month: int, day: int) -> Optional[date]:
    """
    Build a calendar date from its components if they are in range.

    The components must survive calendar construction unchanged, so
    2026-02-30 is rejected rather than rolled over into March.

    Args:
        year: Four digit year
        month: Month number (1-12)
        day: Day of the month (1-31)

    Returns:
        date object or None if the components are out of range or invalid
    """
    if not (MIN_YEAR <= year <= MAX_YEAR and 1 <= month <= 12 and 1 <= day <= 31):
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _match_patterns(text: str):
    """
    Try the pattern table in order.

    Returns:
        Tuple of (pattern name, (year, month, day), date or None) for the first
        pattern whose shape matches, or None if no pattern matches at all
    """
    for name, pattern, order in DATE_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        components = tuple(int(match.group(i)) for i in order)
        return name, components, build_date(*components)
    return None


def _has_non_ascii_digits(text: str) -> bool:
    return any(char.isdigit() and not char.isascii() for char in text)


def _generic_parse(text: str, components: Optional[tuple] = None) -> Optional[date]:
    """
    Last-resort parse with dateutil, restricted to the accepted year range.

    Args:
        text: Trimmed input
        components: (year, month, day) read by a pattern whose shape matched.
            A fallback result that reads the input differently is rejected,
            so "13/05/2026" is not turned into May 13th.
    """
    if _has_non_ascii_digits(text):
        return None
    try:
        parsed = dateutil_parser.parse(text, default=FALLBACK_DEFAULT, dayfirst=False)
    except (ValueError, OverflowError):
        return None
    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        return None
    if components is not None and (parsed.year, parsed.month, parsed.day) != components:
        return None
    return parsed.date()


def parse_date_input(text: Optional[str]) -> Union[date, ParseFailure]:
    """
    Parse a free-form date string into a calendar date.

    Recognised formats, tried in this order:
    - "2026-04-16T23:59:59" / "2026-04-16 23:59:59"
    - "2026/04/16 23:59:59 GMT+08:00"
    - "2026-04-16 23:59:59 GMT+08:00"
    - "2026-04/16 23:59:59"
    - "2026-04-16", "2026/04/16"
    - "2026年04月16日"
    - "04/16/2026"

    The time of day is discarded. A string whose shape matches a pattern but
    whose components are not a valid date skips the remaining patterns and
    goes straight to the generic dateutil parse, which may only confirm the
    components the pattern read, never reinterpret them.

    Inputs outside the table go to dateutil. Fields missing from a partial
    input are filled from 1970-01-01, so "1" parses as 1970-01-01 and
    "April 2026" as 2026-04-01. Digits must be ASCII.

    Args:
        text: Raw user input

    Returns:
        date object, or ParseFailure with code EMPTY or UNRECOGNIZED
    """
    if text is None or not text.strip():
        return ParseFailure(ParseFailure.EMPTY)

    trimmed = text.strip()

    components = None
    result = _match_patterns(trimmed)
    if result is not None:
        name, components, parsed = result
        if parsed is not None:
            logger.debug(f"Parsed '{trimmed}' with pattern '{name}'")
            return parsed
        logger.debug(f"Pattern '{name}' matched '{trimmed}' but the date is invalid")

    parsed = _generic_parse(trimmed, components)
    if parsed is not None:
        logger.debug(f"Parsed '{trimmed}' with generic fallback")
        return parsed

    return ParseFailure(ParseFailure.UNRECOGNIZED, trimmed)


def parse_smart_date(text: Optional[str]) -> Optional[date]:
    """Parse a free-form date string, returning None on any failure."""
    result = parse_date_input(text)
    if isinstance(result, ParseFailure):
        return None
    return result
