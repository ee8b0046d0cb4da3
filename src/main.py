"""
Main script for Tally.

Loads a backup file, filters its resources with a search query and prints
an expiry report, soonest expiry first.

Usage:
    python -m src.main data/tally-backup.json [query] [mode] [group]
"""

import json
import logging
import sys
import time
from pathlib import Path

from src.inventory.backup_loader import load_resources
from src.inventory.resources import list_groups, remaining_days, search, sort_by_expiry, urgency_level
from src.utils.config import DEFAULT_LOCALE, DEFAULT_SEARCH_MODE, LOG_FILE, LOG_LEVEL
from src.utils.date_formatter import from_timestamp, to_display

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[
        logging.FileHandler(LOG_FILE),
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger(__name__)

# Configuration
BACKUP_PATH = "data/tally-backup.json"


def print_report(backup_path: str, pattern: str = "", mode: str = DEFAULT_SEARCH_MODE,
                 group: str = "", now: int = None):
    """Print the filtered resources of a backup file."""
    path = Path(backup_path)
    if not path.exists():
        raise FileNotFoundError(f"Backup file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            backup = json.load(f)
        resources = load_resources(backup)
    except ValueError as e:
        logger.error(f"Invalid backup file {path}: {e}")
        raise

    now = int(time.time()) if now is None else now
    logger.info(f"Loaded {len(resources)} resource(s) from {path}")

    print(f"Backup:  {path}")
    print(f"Groups:  {', '.join(list_groups(resources)) or '-'}")
    print(f"Query:   '{pattern}' ({mode})" + (f", group '{group}'" if group else ""))
    print("-" * 80)

    found = sort_by_expiry(search(resources, pattern, mode, group))
    if not found:
        print("No matching resources.")
        return

    for resource in found:
        days = remaining_days(resource.expire_at, now)
        expiry = to_display(from_timestamp(resource.expire_at), DEFAULT_LOCALE)
        print(f"  [{urgency_level(days):<8}] {resource.name:<30} {resource.group:<15} {expiry:<20} {days:>6}d")
    print("-" * 80)
    print(f"{len(found)} of {len(resources)} resource(s)")


def main():
    """Main entry point."""
    args = sys.argv[1:]
    backup_path = args[0] if args else BACKUP_PATH
    pattern = args[1] if len(args) > 1 else ""
    mode = args[2] if len(args) > 2 else DEFAULT_SEARCH_MODE
    group = args[3] if len(args) > 3 else ""
    print_report(backup_path, pattern, mode, group)


if __name__ == "__main__":
    main()
