"""
JSON persistence for year-indexed census records and baby-name records.

Both files are objects keyed by year strings ("2023": {...}).
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, TypeVar

from average_american.errors import MalformedInputError, MissingStoreError, YearNotFoundError
from average_american.models import NamePopularityRecord, YearRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _read_year_indexed(path: Path, parse: Callable[[Mapping[str, Any]], T]) -> Dict[int, T]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise MalformedInputError(f"Expected a year-indexed object in {path}")

    records: Dict[int, T] = {}
    for key, value in raw.items():
        try:
            year = int(key)
        except ValueError as e:
            raise MalformedInputError(f"Invalid year key {key!r} in {path}") from e
        try:
            records[year] = parse(value)
        except MalformedInputError as e:
            raise MalformedInputError(f"{path} [{year}]: {e}") from e
    return records


def _write_year_indexed(records: Mapping[int, Any], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {str(year): records[year].to_dict() for year in sorted(records)}
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Saved {len(payload)} years to {path}")
    return path


def load_year_records(path: Path) -> Dict[int, YearRecord]:
    path = Path(path)
    if not path.exists():
        raise MissingStoreError()
    records = _read_year_indexed(path, YearRecord.from_dict)
    logger.debug(f"Loaded census records for {sorted(records)} from {path}")
    return records


def latest_year(records: Mapping[int, YearRecord]) -> int:
    if not records:
        raise MissingStoreError("Census data file is empty. Run with --fetch to download data from census.gov.")
    return max(records)


def select_year(records: Mapping[int, YearRecord], year: int) -> YearRecord:
    if year not in records:
        raise YearNotFoundError(year, records.keys())
    return records[year]


def load_name_index(path: Path) -> Dict[int, NamePopularityRecord]:
    path = Path(path)
    if not path.exists():
        logger.info(f"No baby name data at {path}; profiles will have no names")
        return {}
    return _read_year_indexed(path, NamePopularityRecord.from_dict)


def save_year_records(records: Mapping[int, YearRecord], path: Path) -> Path:
    return _write_year_indexed(records, path)


def save_name_index(index: Mapping[int, NamePopularityRecord], path: Path) -> Path:
    return _write_year_indexed(index, path)
