"""
Renewal validation module.

Validates a renewal request and the expiry it produces, so that callers can
keep the 1970-2100 date range intact end to end. The calculator in
renewal.py does not check any of this itself.
"""

from datetime import date
from typing import List, Optional

from src.utils.config import MAX_RENEWAL_YEARS
from src.utils.date_extractors import MAX_YEAR, MIN_YEAR
from src.utils.date_formatter import SECONDS_PER_DAY, from_timestamp, to_canonical
from src.utils.renewal import CalendarYears, Days, ExplicitDate, RenewalSpec, compute_renewal


class RenewalValidationError:
    """A coded problem found with a renewal, blocking ('error') or advisory ('warning')."""

    def __init__(self, code: str, message: str, severity: str = "error"):
        self.code = code
        self.message = message
        self.severity = severity

    @property
    def is_blocking(self) -> bool:
        """Errors stop the renewal from being applied; warnings do not."""
        return self.severity == "error"

    def __str__(self):
        return f"{self.code}: {self.message}"

    def __repr__(self):
        return f"RenewalValidationError(code='{self.code}', severity='{self.severity}')"

    def __eq__(self, other):
        if not isinstance(other, RenewalValidationError):
            return False
        return (self.code, self.message, self.severity) == (other.code, other.message, other.severity)


class RenewalValidationResult:
    """
    Outcome of checking a renewal.

    Holds the requested spec, the expiry timestamp it produces (None when the
    renewal cannot be computed within range) and the problems found.
    """

    def __init__(self, spec: Optional[RenewalSpec] = None):
        self.spec = spec
        self.new_expiry: Optional[int] = None
        self.errors: List[RenewalValidationError] = []
        self.warnings: List[RenewalValidationError] = []

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def predicted_date(self) -> Optional[date]:
        """UTC calendar date of the new expiry, for showing before confirming."""
        if self.new_expiry is None:
            return None
        return from_timestamp(self.new_expiry)

    @property
    def codes(self) -> List[str]:
        """Codes of all errors and warnings, errors first."""
        return [issue.code for issue in self.errors + self.warnings]

    def add_error(self, code: str, message: str):
        self.errors.append(RenewalValidationError(code, message, "error"))

    def add_warning(self, code: str, message: str):
        self.warnings.append(RenewalValidationError(code, message, "warning"))

    def __repr__(self):
        predicted = to_canonical(self.predicted_date) if self.predicted_date else None
        return (f"RenewalValidationResult(spec={self.spec!r}, predicted_date={predicted}, "
                f"codes={self.codes})")


def _approximate_years(spec: RenewalSpec) -> float:
    if isinstance(spec, CalendarYears):
        return spec.count
    if isinstance(spec, Days):
        return spec.count / 365
    return 0


def validate_renewal(
    current_expiry: int,
    spec: Optional[RenewalSpec],
    now: int,
    max_years: int = MAX_RENEWAL_YEARS
) -> RenewalValidationResult:
    """
    Validate a renewal before it is applied.

    Performs the following validations:
    - spec is one of Days, CalendarYears or ExplicitDate
    - Days and CalendarYears carry a positive integer count
    - the resulting expiry falls within the accepted year range
    - the renewal is not excessively long (warning)
    - the resulting expiry is later than the current expiry (warning)
    - the resulting expiry is not already in the past (warning)

    Args:
        current_expiry: Current expiry timestamp
        spec: The requested renewal
        now: Current timestamp
        max_years: Renewals longer than this produce a warning

    Returns:
        RenewalValidationResult with errors, warnings and the computed expiry
    """
    result = RenewalValidationResult(spec)

    if not isinstance(spec, (Days, CalendarYears, ExplicitDate)):
        result.add_error("INVALID_SPEC", f"Unsupported renewal spec: {spec!r}")
        return result

    if isinstance(spec, (Days, CalendarYears)):
        count = spec.count
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            result.add_error("INVALID_COUNT", f"Renewal count must be a positive integer, got {count!r}")
            return result

    years = _approximate_years(spec)
    if years > max_years:
        result.add_warning(
            "EXCESSIVE_RENEWAL",
            f"Renewal of about {years:.0f} years exceeds {max_years} years, which seems excessive"
        )

    try:
        new_expiry = compute_renewal(current_expiry, spec, now)
        new_date = from_timestamp(new_expiry)
    except (OverflowError, ValueError, OSError):
        result.add_error("OUT_OF_RANGE", f"Renewal {spec!r} produces a date outside {MIN_YEAR}-{MAX_YEAR}")
        return result

    if not MIN_YEAR <= new_date.year <= MAX_YEAR:
        result.add_error(
            "OUT_OF_RANGE",
            f"New expiry ({to_canonical(new_date)}) is outside {MIN_YEAR}-{MAX_YEAR}"
        )
        return result

    result.new_expiry = new_expiry

    if new_expiry <= current_expiry:
        result.add_warning(
            "NOT_EXTENDED",
            f"New expiry ({to_canonical(new_date)}) is not later than the current expiry "
            f"({to_canonical(from_timestamp(current_expiry))})"
        )

    if new_expiry < now - SECONDS_PER_DAY:
        result.add_warning(
            "ALREADY_EXPIRED",
            f"New expiry ({to_canonical(new_date)}) is already in the past"
        )

    return result


def is_renewal_valid(
    current_expiry: int,
    spec: Optional[RenewalSpec],
    now: int,
    max_years: int = MAX_RENEWAL_YEARS
) -> bool:
    """
    Quick check if a renewal can be applied.

    Returns:
        True if valid (no errors), False otherwise
    """
    result = validate_renewal(current_expiry, spec, now, max_years)
    return result.is_valid
