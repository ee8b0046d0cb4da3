"""
Tests for the main.py and main_date_normalizer.py entry scripts.
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import pandas as pd

from src.main import print_report
from src.main_date_normalizer import (
    CANONICAL_FIELD,
    ERROR_FIELD,
    TIMESTAMP_FIELD,
    normalize_csv,
    normalize_value,
    process_chunk,
)
from src.utils.date_extractors import ParseFailure


class TestNormalizeValue(unittest.TestCase):
    """Tests for normalize_value function."""

    def test_valid(self):
        result = normalize_value("2026/04/16 23:59:59 GMT+08:00")
        self.assertEqual(result[CANONICAL_FIELD], "2026-04-16")
        self.assertEqual(result[TIMESTAMP_FIELD], 1776297600)
        self.assertIsNone(result[ERROR_FIELD])

    def test_empty_and_null(self):
        self.assertEqual(normalize_value("")[ERROR_FIELD], ParseFailure.EMPTY)
        self.assertEqual(normalize_value(None)[ERROR_FIELD], ParseFailure.EMPTY)
        self.assertEqual(normalize_value(pd.NA)[ERROR_FIELD], ParseFailure.EMPTY)

    def test_unrecognized(self):
        result = normalize_value("next tuesday-ish")
        self.assertEqual(result[ERROR_FIELD], ParseFailure.UNRECOGNIZED)
        self.assertIsNone(result[CANONICAL_FIELD])


class TestProcessChunk(unittest.TestCase):
    """Tests for process_chunk function."""

    def test_adds_columns(self):
        chunk = pd.DataFrame({
            "name": ["a", "b", "c"],
            "expire_at": ["2026年4月16日", "", "2026-02-30"],
        })
        result = process_chunk(chunk)

        self.assertEqual(list(result["name"]), ["a", "b", "c"])
        self.assertEqual(result[CANONICAL_FIELD].iloc[0], "2026-04-16")
        self.assertEqual(result[ERROR_FIELD].iloc[1], ParseFailure.EMPTY)
        self.assertEqual(result[ERROR_FIELD].iloc[2], ParseFailure.UNRECOGNIZED)
        self.assertTrue(pd.isna(result[TIMESTAMP_FIELD].iloc[2]))

    def test_missing_column(self):
        with self.assertRaises(KeyError):
            process_chunk(pd.DataFrame({"name": ["a"]}))


class TestNormalizeCsv(unittest.TestCase):
    """Tests for normalize_csv function."""

    def test_round_trip_through_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "in.csv"
            target = Path(tmp) / "out.csv"
            pd.DataFrame({
                "name": ["a", "b", "c", "d"],
                "expire_at": ["04/16/2026", "2026-04-16", "", "garbage"],
            }).to_csv(source, index=False)

            stats = normalize_csv(str(source), str(target), chunk_size=2)

            self.assertEqual(stats["processed"], 4)
            self.assertEqual(stats["valid"], 2)
            self.assertEqual(stats["empty"], 1)
            self.assertEqual(stats["unrecognized"], 1)

            output = pd.read_csv(target, dtype=str, keep_default_na=False)
            self.assertEqual(list(output[CANONICAL_FIELD]), ["2026-04-16", "2026-04-16", "", ""])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            normalize_csv("/nonexistent/in.csv", "/nonexistent/out.csv")


class TestPrintReport(unittest.TestCase):
    """Tests for the report printed by main.py."""

    def test_report(self):
        now = 1767225600
        backup = {
            "version": "1.0",
            "export_at": now,
            "resources": [
                {"name": "云服务器", "group": "阿里云", "expire_at": now + 40 * 86400, "created_at": now},
                {"name": "example.com", "group": "Domains", "expire_at": now + 3 * 86400, "created_at": now},
            ],
        }
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "backup.json"
            path.write_text(json.dumps(backup), encoding="utf-8")

            out = io.StringIO()
            with redirect_stdout(out):
                print_report(str(path), "yfw", "normal", now=now)

        report = out.getvalue()
        self.assertIn("云服务器", report)
        self.assertNotIn("example.com", report)
        self.assertIn("1 of 2 resource(s)", report)

    def test_invalid_backup(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "backup.json"
            path.write_text(json.dumps({"version": "1.0"}), encoding="utf-8")
            with self.assertRaises(ValueError):
                print_report(str(path))


if __name__ == '__main__':
    unittest.main()
