"""Canonical and display formatting for calendar dates."""

from datetime import date, datetime, timezone
from typing import Optional

from src.utils.config import DEFAULT_LOCALE

CANONICAL = "canonical"
DISPLAY = "display"

EN_MONTHS = [
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
]

SECONDS_PER_DAY = 86400


def to_canonical(value: date) -> str:
    """Format a date as zero-padded YYYY-MM-DD."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def to_display(value: date, locale: Optional[str] = None) -> str:
    """
    Format a date for presentation.

    Args:
        value: The date to format
        locale: "zh" for 2026年4月16日, "en" for April 16, 2026

    Returns:
        Long-form date string. Unknown locales use the configured default.
    """
    locale = locale or DEFAULT_LOCALE
    if locale not in ("zh", "en"):
        locale = DEFAULT_LOCALE if DEFAULT_LOCALE in ("zh", "en") else "zh"

    if locale == "en":
        return f"{EN_MONTHS[value.month - 1]} {value.day}, {value.year}"
    return f"{value.year}年{value.month}月{value.day}日"


def format_date(value: date, style: str = CANONICAL, locale: Optional[str] = None) -> str:
    """Format a date in the canonical or display style."""
    if style == CANONICAL:
        return to_canonical(value)
    if style == DISPLAY:
        return to_display(value, locale)
    raise ValueError(f"Unknown date style: {style}")


def to_timestamp(value: date) -> int:
    """Seconds since the epoch at UTC midnight of the given date."""
    midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return int(midnight.timestamp())


def from_timestamp(timestamp: int) -> date:
    """UTC calendar date of a seconds-since-epoch timestamp."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date()
