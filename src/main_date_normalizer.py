"""
Batch date normalizer for Tally imports.

Reads a CSV with a column of free-form expiry dates (as pasted from cloud
consoles or spreadsheets), parses each value and writes the canonical
YYYY-MM-DD date and its UTC timestamp alongside the original columns.

Uses chunked CSV reading so large exports can be processed.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict

import pandas as pd
from tqdm import tqdm

from src.utils.config import LOG_FILE, LOG_LEVEL
from src.utils.date_extractors import ParseFailure, parse_date_input
from src.utils.date_formatter import to_canonical, to_timestamp

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
DATE_FIELD = "expire_at"
CANONICAL_FIELD = "expire_date"
TIMESTAMP_FIELD = "expire_timestamp"
ERROR_FIELD = "parse_error"

CHUNK_SIZE = 10000


def normalize_value(value: Any) -> Dict[str, Any]:
    """
    Parse a single raw date value.

    Returns:
        Dictionary with canonical date, timestamp and parse error (one of
        EMPTY, UNRECOGNIZED or None)
    """
    text = "" if value is None or pd.isna(value) else str(value)
    parsed = parse_date_input(text)
    if isinstance(parsed, ParseFailure):
        return {CANONICAL_FIELD: None, TIMESTAMP_FIELD: None, ERROR_FIELD: parsed.code}
    return {
        CANONICAL_FIELD: to_canonical(parsed),
        TIMESTAMP_FIELD: to_timestamp(parsed),
        ERROR_FIELD: None,
    }


def process_chunk(chunk: pd.DataFrame, date_field: str = DATE_FIELD) -> pd.DataFrame:
    """
    Normalize the date column of a chunk.

    Args:
        chunk: DataFrame chunk from the CSV
        date_field: Name of the raw date column

    Returns:
        The chunk with canonical, timestamp and error columns added
    """
    if date_field not in chunk.columns:
        raise KeyError(f"Column '{date_field}' not found in CSV")

    normalized = pd.DataFrame(
        [normalize_value(v) for v in chunk[date_field]],
        index=chunk.index,
        columns=[CANONICAL_FIELD, TIMESTAMP_FIELD, ERROR_FIELD],
    )
    normalized[TIMESTAMP_FIELD] = normalized[TIMESTAMP_FIELD].astype("Int64")
    return pd.concat([chunk, normalized], axis=1)


def normalize_csv(
    csv_path: str,
    output_path: str,
    date_field: str = DATE_FIELD,
    chunk_size: int = CHUNK_SIZE,
) -> dict:
    """
    Normalize the date column of a CSV file into a new CSV file.

    Args:
        csv_path: Path to the input CSV file
        output_path: Path of the CSV file to write
        date_field: Name of the raw date column
        chunk_size: Number of rows to process per chunk

    Returns:
        Dictionary with total counts
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    logger.info(f"Counting rows in {csv_path}...")
    with open(csv_path, encoding="utf-8") as f:
        total_rows = sum(1 for _ in f) - 1
    logger.info(f"Total rows to process: {total_rows:,}")

    stats = {"processed": 0, "valid": 0, "empty": 0, "unrecognized": 0}
    start_time = time.time()
    write_header = True

    try:
        chunks = pd.read_csv(csv_path, chunksize=chunk_size, dtype=str, keep_default_na=False)
        with tqdm(total=total_rows, desc="Normalizing", unit="rows") as pbar:
            for chunk in chunks:
                result = process_chunk(chunk, date_field)

                errors = result[ERROR_FIELD]
                stats["processed"] += len(result)
                stats["valid"] += int(errors.isna().sum())
                stats["empty"] += int((errors == ParseFailure.EMPTY).sum())
                stats["unrecognized"] += int((errors == ParseFailure.UNRECOGNIZED).sum())

                result.to_csv(output_path, mode="w" if write_header else "a",
                              header=write_header, index=False)
                write_header = False

                pbar.update(len(chunk))
                pbar.set_postfix({"valid": stats["valid"], "unrecognized": stats["unrecognized"]})

    except Exception as e:
        logger.error(f"Error processing CSV: {e}")
        raise

    stats["elapsed_seconds"] = time.time() - start_time
    logger.info(
        f"Completed in {stats['elapsed_seconds']:.1f} seconds | "
        f"Valid: {stats['valid']:,} | Empty: {stats['empty']:,} | Unrecognized: {stats['unrecognized']:,}"
    )
    return stats


def main():
    """Main entry point."""
    if len(sys.argv) < 3:
        print("Usage: python -m src.main_date_normalizer <input.csv> <output.csv> [date_column]")
        sys.exit(1)

    date_field = sys.argv[3] if len(sys.argv) > 3 else DATE_FIELD
    stats = normalize_csv(sys.argv[1], sys.argv[2], date_field)

    processed = max(stats["processed"], 1)
    print("\n" + "=" * 60)
    print("Normalization Complete!")
    print("=" * 60)
    print(f"Total processed:    {stats['processed']:,}")
    print(f"Valid dates:        {stats['valid']:,} ({100 * stats['valid'] / processed:.1f}%)")
    print(f"Empty:              {stats['empty']:,}")
    print(f"Unrecognized:       {stats['unrecognized']:,}")
    print(f"Time elapsed:       {stats['elapsed_seconds']:.2f} seconds")
    print("=" * 60)


if __name__ == "__main__":
    main()
