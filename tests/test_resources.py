"""
Tests for the inventory resources and backup loader modules.
"""

import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.inventory.backup_loader import BACKUP_VERSION, load_resources, to_backup
from src.inventory.resources import (
    CRITICAL,
    EXPIRED,
    OK,
    WARNING,
    Resource,
    list_groups,
    remaining_days,
    search,
    sort_by_expiry,
    urgency_level,
)

DAY = 86400
NOW = 1_767_225_600  # 2026-01-01 00:00:00 UTC


def sample_resources():
    return [
        Resource("云服务器", NOW + 40 * DAY, group="阿里云"),
        Resource("example.com", NOW + 3 * DAY, group="Domains"),
        Resource("Object Storage", NOW - DAY, group="阿里云"),
        Resource("SSL Certificate", NOW + 20 * DAY),
    ]


class TestRemainingDays(unittest.TestCase):
    """Tests for remaining_days function."""

    def test_whole_days(self):
        self.assertEqual(remaining_days(NOW + 30 * DAY, NOW), 30)

    def test_partial_day_rounds_up(self):
        self.assertEqual(remaining_days(NOW + DAY + 1, NOW), 2)
        self.assertEqual(remaining_days(NOW + 1, NOW), 1)

    def test_expiring_now(self):
        self.assertEqual(remaining_days(NOW, NOW), 0)

    def test_expired(self):
        self.assertEqual(remaining_days(NOW - 2 * DAY, NOW), -2)
        self.assertEqual(remaining_days(NOW - DAY - 1, NOW), -1)


class TestUrgencyLevel(unittest.TestCase):
    """Tests for urgency_level function."""

    def test_levels(self):
        self.assertEqual(urgency_level(-5), EXPIRED)
        self.assertEqual(urgency_level(0), EXPIRED)
        self.assertEqual(urgency_level(1), CRITICAL)
        self.assertEqual(urgency_level(7), CRITICAL)
        self.assertEqual(urgency_level(8), WARNING)
        self.assertEqual(urgency_level(30), WARNING)
        self.assertEqual(urgency_level(31), OK)

    def test_custom_thresholds(self):
        self.assertEqual(urgency_level(10, critical_days=14, warning_days=60), CRITICAL)
        self.assertEqual(urgency_level(45, critical_days=14, warning_days=60), WARNING)


class TestSearch(unittest.TestCase):
    """Tests for record-level search."""

    def test_empty_query_keeps_all(self):
        resources = sample_resources()
        self.assertEqual(search(resources, ""), resources)

    def test_matches_name_or_group(self):
        names = [r.name for r in search(sample_resources(), "domains", "normal")]
        self.assertEqual(names, ["example.com"])

    def test_pinyin_on_group(self):
        """Test 'aly' finds both resources in the 阿里云 group."""
        names = [r.name for r in search(sample_resources(), "aly", "normal")]
        self.assertEqual(names, ["云服务器", "Object Storage"])

    def test_initials_on_name(self):
        names = [r.name for r in search(sample_resources(), "yfw", "normal")]
        self.assertEqual(names, ["云服务器"])

    def test_group_filter(self):
        names = [r.name for r in search(sample_resources(), "", "normal", group_filter="阿里云")]
        self.assertEqual(names, ["云服务器", "Object Storage"])

    def test_group_filter_and_query(self):
        names = [r.name for r in search(sample_resources(), "storage", "normal", group_filter="阿里云")]
        self.assertEqual(names, ["Object Storage"])
        self.assertEqual(search(sample_resources(), "example", "normal", group_filter="阿里云"), [])

    def test_glob(self):
        names = [r.name for r in search(sample_resources(), "*.com", "glob")]
        self.assertEqual(names, ["example.com"])

    def test_regex(self):
        names = [r.name for r in search(sample_resources(), r"^s\w+ cert", "regex")]
        self.assertEqual(names, ["SSL Certificate"])

    def test_invalid_regex_empties_list(self):
        self.assertEqual(search(sample_resources(), "[", "regex"), [])

    def test_idempotent_and_order_preserving(self):
        resources = sample_resources()
        first = search(resources, "o", "normal")
        second = search(resources, "o", "normal")
        self.assertEqual(first, second)
        self.assertEqual(first, [r for r in resources if r in first])


class TestListHelpers(unittest.TestCase):
    """Tests for list_groups and sort_by_expiry."""

    def test_list_groups(self):
        self.assertEqual(list_groups(sample_resources()), ["阿里云", "Domains"])

    def test_sort_by_expiry(self):
        names = [r.name for r in sort_by_expiry(sample_resources())]
        self.assertEqual(names, ["Object Storage", "example.com", "SSL Certificate", "云服务器"])


class TestBackupLoader(unittest.TestCase):
    """Tests for load_resources and to_backup."""

    def test_load(self):
        backup = {
            "version": "1.0",
            "export_at": NOW,
            "resources": [
                {"name": "云服务器", "group": "阿里云", "expire_at": NOW, "created_at": NOW - DAY},
                {"name": "example.com", "expire_at": str(NOW)},
            ],
        }
        resources = load_resources(backup)
        self.assertEqual(len(resources), 2)
        self.assertEqual(resources[0].group, "阿里云")
        self.assertEqual(resources[0].created_at, NOW - DAY)
        self.assertEqual(resources[1].group, "")
        self.assertEqual(resources[1].expire_at, NOW)

    def test_missing_resources(self):
        with self.assertRaises(ValueError):
            load_resources({"version": "1.0"})

    def test_missing_name(self):
        with self.assertRaises(ValueError):
            load_resources({"resources": [{"expire_at": NOW}]})

    def test_missing_expire_at(self):
        with self.assertRaises(ValueError):
            load_resources({"resources": [{"name": "x"}]})

    def test_bad_timestamp(self):
        with self.assertRaises(ValueError):
            load_resources({"resources": [{"name": "x", "expire_at": "2026-01-01"}]})

    def test_to_backup(self):
        backup = to_backup([Resource("x", NOW, group="g", created_at=1)], export_at=NOW)
        self.assertEqual(backup["version"], BACKUP_VERSION)
        self.assertEqual(backup["export_at"], NOW)
        self.assertEqual(backup["resources"], [
            {"name": "x", "group": "g", "expire_at": NOW, "created_at": 1},
        ])
        self.assertEqual(load_resources(backup), [Resource("x", NOW, group="g", created_at=1)])


if __name__ == '__main__':
    unittest.main()
