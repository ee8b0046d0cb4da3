"""
Resource records and list operations for the expiry dashboard.

Everything here works on already-loaded records; nothing touches storage.
"""

import math
from typing import Iterable, List, Optional

from src.utils.config import CRITICAL_DAYS, WARNING_DAYS
from src.utils.date_formatter import SECONDS_PER_DAY
from src.utils.search_matcher import SearchQuery, compile_query, matches

# Urgency levels, most urgent first
EXPIRED = "expired"
CRITICAL = "critical"
WARNING = "warning"
OK = "ok"


class Resource:
    """A tracked resource with an expiry timestamp (seconds since epoch)."""

    def __init__(self, name: str, expire_at: int, group: str = "", created_at: int = 0,
                 resource_id: Optional[int] = None):
        self.id = resource_id
        self.name = name
        self.group = group or ""
        self.expire_at = expire_at
        self.created_at = created_at

    def __repr__(self):
        return f"Resource(name='{self.name}', group='{self.group}', expire_at={self.expire_at})"

    def __eq__(self, other):
        if not isinstance(other, Resource):
            return False
        return (self.id, self.name, self.group, self.expire_at, self.created_at) == \
            (other.id, other.name, other.group, other.expire_at, other.created_at)


def remaining_days(expire_at: int, now: int) -> int:
    """Whole days left until expiry, rounded up. Zero or negative once expired."""
    return math.ceil((expire_at - now) / SECONDS_PER_DAY)


def urgency_level(days: int, critical_days: int = CRITICAL_DAYS, warning_days: int = WARNING_DAYS) -> str:
    """
    Classify remaining days into an urgency level.

    Args:
        days: Output of remaining_days
        critical_days: At or below this is critical
        warning_days: At or below this is a warning

    Returns:
        One of "expired", "critical", "warning", "ok"
    """
    if days <= 0:
        return EXPIRED
    if days <= critical_days:
        return CRITICAL
    if days <= warning_days:
        return WARNING
    return OK


def resource_matches(resource: Resource, query: SearchQuery, group_filter: Optional[str] = None,
                     compiled=None) -> bool:
    """Name or group matches the query, and the group equals the filter if one is set."""
    if group_filter and resource.group != group_filter:
        return False
    return matches(resource.name, query, compiled) or matches(resource.group, query, compiled)


def search(resources: Iterable[Resource], pattern: str = "", mode: Optional[str] = None,
           group_filter: Optional[str] = None) -> List[Resource]:
    """
    Filter resources by a search query and an optional group.

    Args:
        resources: Records to filter
        pattern: Search text; empty matches everything
        mode: "normal", "glob" or "regex" (default from configuration)
        group_filter: Exact group name to keep; empty or None keeps all groups

    Returns:
        Matching records in their original order
    """
    query = SearchQuery(pattern, mode)
    compiled = compile_query(query)
    return [r for r in resources if resource_matches(r, query, group_filter, compiled)]


def list_groups(resources: Iterable[Resource]) -> List[str]:
    """Distinct non-empty group names in first-seen order."""
    groups = []
    for resource in resources:
        if resource.group and resource.group not in groups:
            groups.append(resource.group)
    return groups


def sort_by_expiry(resources: Iterable[Resource]) -> List[Resource]:
    """Soonest expiry first."""
    return sorted(resources, key=lambda r: r.expire_at)
