"""
Download and parse the Census Bureau national population estimates by age and sex.

The workbook (nc-est2024-agesex.xlsx) has one column triple per estimate
year: both sexes, male, female. Rows of interest (1-based, as shown in Excel):

- row 4: year headers, placed over the "both sexes" column
- row 6: total population
- row 40: median age
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
import requests

from average_american.errors import FetchError
from average_american.models import AgeFigures, Gender, GenderDistribution, YearRecord
from average_american.stats import round_half_up

logger = logging.getLogger(__name__)

CACHE_FILE_NAME = "census_age_sex.xlsx"
SOURCE = "US Census"

# 0-based row indices into the header-less sheet
YEAR_ROW = 3
TOTAL_ROW = 5
MEDIAN_AGE_ROW = 39

YEAR_PATTERN = re.compile(r"^(\d{4})(?:\.0+)?$")


def download_census(url: str, cache_dir: Path, timeout: float = 60) -> Path:
    """Download the census workbook into cache_dir, reusing a cached copy if present."""
    cache_dir = Path(cache_dir)
    cache_dir.mkdir(parents=True, exist_ok=True)
    file_path = cache_dir / CACHE_FILE_NAME
    if file_path.exists():
        logger.debug(f"Cache hit for census workbook: {file_path}")
        return file_path

    logger.info(f"Downloading census workbook from {url}")
    try:
        response = requests.get(url, headers={"User-Agent": "Mozilla/5.0"}, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Failed to download {url}: {e}") from e
    if response.status_code != 200:
        raise FetchError(f"Failed to download file: {response.status_code}")

    file_path.write_bytes(response.content)
    return file_path


def parse_number(value: Any) -> float:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return 0.0
    cleaned = re.sub(r"[,\s]", "", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def _cell(sheet: pd.DataFrame, row: int, col: int) -> Any:
    if row >= sheet.shape[0] or col >= sheet.shape[1]:
        return None
    return sheet.iat[row, col]


def extract_years(sheet: pd.DataFrame) -> Dict[int, int]:
    """Map each estimate year to its "both sexes" column index."""
    years: Dict[int, int] = {}
    if sheet.shape[0] <= YEAR_ROW:
        return years
    for col in range(sheet.shape[1]):
        value = _cell(sheet, YEAR_ROW, col)
        if value is None or (isinstance(value, float) and pd.isna(value)):
            continue
        match = YEAR_PATTERN.match(str(value).strip())
        if match:
            years[int(match.group(1))] = col
    return years


def calculate_gender_percentages(counts: Dict[Gender, float]) -> Dict[Gender, float]:
    total = sum(counts.values())
    if total == 0:
        return {}
    return {g: round_half_up(counts[g] / total * 100, 1) for g in Gender if g in counts}


def extract_gender_data(sheet: pd.DataFrame, both_sexes_col: int) -> Dict[Gender, float]:
    counts = {
        Gender.MALE: parse_number(_cell(sheet, TOTAL_ROW, both_sexes_col + 1)),
        Gender.FEMALE: parse_number(_cell(sheet, TOTAL_ROW, both_sexes_col + 2)),
    }
    return calculate_gender_percentages(counts)


def extract_age_data(sheet: pd.DataFrame, both_sexes_col: int) -> AgeFigures:
    def median_at(col: int) -> Optional[float]:
        value = parse_number(_cell(sheet, MEDIAN_AGE_ROW, col))
        return value if value > 0 else None

    by_gender = {
        Gender.MALE: median_at(both_sexes_col + 1),
        Gender.FEMALE: median_at(both_sexes_col + 2),
    }
    return AgeFigures(
        median=median_at(both_sexes_col),
        by_gender={g: v for g, v in by_gender.items() if v is not None} or None,
    )


def parse_census_workbook(file_path: Path) -> Dict[int, YearRecord]:
    sheet = pd.read_excel(file_path, sheet_name=0, header=None, engine="openpyxl")
    years = extract_years(sheet)
    if not years:
        raise FetchError(f"No year columns found in {file_path}; has the census table layout changed?")

    data_by_year: Dict[int, YearRecord] = {}
    for year, col in sorted(years.items()):
        record = YearRecord(
            gender=GenderDistribution(
                distribution=extract_gender_data(sheet, col),
                source=SOURCE,
                year=year,
            ),
            age=extract_age_data(sheet, col),
        )
        if record.age.median is None:
            logger.warning(f"No median age found for {year}")
        data_by_year[year] = record
    return data_by_year
