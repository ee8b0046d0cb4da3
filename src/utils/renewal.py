"""
Renewal arithmetic for resource expiry timestamps.

All instants are integer seconds since the epoch (UTC).
"""

from datetime import date, datetime, timezone

from dateutil.relativedelta import relativedelta

from src.utils.date_formatter import SECONDS_PER_DAY, from_timestamp, to_timestamp


class RenewalSpec:
    """Base class for the three ways a resource can be renewed."""

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__


class Days(RenewalSpec):
    """Extend by a fixed number of 24 hour days."""

    def __init__(self, count: int):
        self.count = count

    def __repr__(self):
        return f"Days({self.count})"


class CalendarYears(RenewalSpec):
    """Extend by whole calendar years, keeping month and day."""

    def __init__(self, count: int):
        self.count = count

    def __repr__(self):
        return f"CalendarYears({self.count})"


class ExplicitDate(RenewalSpec):
    """Set the expiry to a given calendar date."""

    def __init__(self, value: date):
        self.value = value

    def __repr__(self):
        return f"ExplicitDate({self.value.isoformat()})"


def renewal_base(current_expiry: int, now: int) -> int:
    """Renewals of an expired resource start from now, otherwise from the current expiry."""
    return now if current_expiry < now else current_expiry


def _add_calendar_years(base: int, years: int) -> int:
    """
    Add whole years to a timestamp, keeping month, day and time of day.

    Feb 29 moved into a non-leap year is clamped to Feb 28.
    """
    base_dt = datetime.fromtimestamp(base, tz=timezone.utc)
    return int((base_dt + relativedelta(years=years)).timestamp())


def compute_renewal(current_expiry: int, spec: RenewalSpec, now: int) -> int:
    """
    Compute the new expiry timestamp for a renewal.

    Args:
        current_expiry: Current expiry timestamp
        spec: Days, CalendarYears or ExplicitDate
        now: Current timestamp

    Returns:
        New expiry timestamp. ExplicitDate yields UTC midnight of its date.
    """
    if isinstance(spec, ExplicitDate):
        return to_timestamp(spec.value)

    base = renewal_base(current_expiry, now)
    if isinstance(spec, Days):
        return base + spec.count * SECONDS_PER_DAY
    if isinstance(spec, CalendarYears):
        return _add_calendar_years(base, spec.count)

    raise TypeError(f"Unsupported renewal spec: {spec!r}")


def predict_expiry_date(current_expiry: int, spec: RenewalSpec, now: int) -> date:
    """Calendar date (UTC) a renewal would produce, for previews."""
    return from_timestamp(compute_renewal(current_expiry, spec, now))
