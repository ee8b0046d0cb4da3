"""
Conversion between backup documents and Resource records.

A backup document looks like:

    {
        "version": "1.0",
        "export_at": 1760832000,
        "resources": [
            {"name": "云服务器", "group": "阿里云", "expire_at": 1776297600, "created_at": 1744761600}
        ]
    }
"""

from typing import Any, Dict, Iterable, List

from src.inventory.resources import Resource

BACKUP_VERSION = "1.0"


def _to_int(value: Any, field: str, index: int) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Resource {index}: '{field}' must be an integer timestamp")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Resource {index}: '{field}' must be an integer timestamp, got {value!r}")


def load_resources(backup: Dict[str, Any]) -> List[Resource]:
    """
    Build Resource records from a decoded backup document.

    Args:
        backup: Mapping with a 'resources' list

    Returns:
        List of Resource objects in document order

    Raises:
        ValueError: if the document or one of its records is malformed
    """
    if not isinstance(backup, dict) or not isinstance(backup.get("resources"), list):
        raise ValueError("Backup must be an object with a 'resources' list")

    resources = []
    for index, item in enumerate(backup["resources"]):
        if not isinstance(item, dict):
            raise ValueError(f"Resource {index}: expected an object")
        name = item.get("name")
        if not name:
            raise ValueError(f"Resource {index}: 'name' is required")
        if "expire_at" not in item:
            raise ValueError(f"Resource {index}: 'expire_at' is required")

        resources.append(Resource(
            name=str(name),
            group=str(item.get("group") or ""),
            expire_at=_to_int(item["expire_at"], "expire_at", index),
            created_at=_to_int(item.get("created_at", 0), "created_at", index),
            resource_id=item.get("id"),
        ))
    return resources


def to_backup(resources: Iterable[Resource], export_at: int) -> Dict[str, Any]:
    """Build a backup document from Resource records."""
    return {
        "version": BACKUP_VERSION,
        "export_at": export_at,
        "resources": [
            {
                "name": r.name,
                "group": r.group,
                "expire_at": r.expire_at,
                "created_at": r.created_at,
            }
            for r in resources
        ],
    }
