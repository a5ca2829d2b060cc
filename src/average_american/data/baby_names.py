"""
Most popular baby name per year and gender, from the SSA national names data.

Expected columns (Kaggle "US Baby Names", NationalNames.csv):
Id, Name, Year, Gender (M/F), Count
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

import pandas as pd
from kagglehub import KaggleDatasetAdapter, load_dataset

from average_american.errors import MalformedInputError
from average_american.models import Gender, NamePopularityRecord

logger = logging.getLogger(__name__)

SOURCE = "Social Security Administration (via Kaggle)"
SOURCE_URL = "https://www.kaggle.com/datasets/kaggle/us-baby-names"
REQUIRED_COLUMNS = {"Year", "Name", "Gender", "Count"}
SEX_CODES = {"M": Gender.MALE, "F": Gender.FEMALE}


def download_baby_names(dataset: str, file_name: str) -> pd.DataFrame:
    logger.info(f"Loading {file_name} from Kaggle dataset {dataset}")
    return load_dataset(KaggleDatasetAdapter.PANDAS, dataset, file_name)


def read_baby_names_csv(path: Path) -> pd.DataFrame:
    return pd.read_csv(path)


def build_name_index(names: pd.DataFrame) -> Dict[int, NamePopularityRecord]:
    missing = REQUIRED_COLUMNS - set(names.columns)
    if missing:
        raise MalformedInputError(f"Baby names data is missing columns: {sorted(missing)}")

    df = names[["Year", "Name", "Gender", "Count"]].copy()
    df["Gender"] = df["Gender"].astype(str).str.strip().str.upper().map(SEX_CODES)
    df["Count"] = pd.to_numeric(df["Count"], errors="coerce")
    df = df.dropna(subset=["Year", "Name", "Gender", "Count"])
    df["Year"] = df["Year"].astype(int)

    # stable sort keeps file order among equal counts
    top = df.sort_values("Count", ascending=False, kind="mergesort").drop_duplicates(["Year", "Gender"])

    index: Dict[int, NamePopularityRecord] = {}
    for year, group in top.groupby("Year"):
        most_popular = {g: None for g in Gender}
        counts = {g: None for g in Gender}
        for row in group.itertuples(index=False):
            most_popular[row.Gender] = str(row.Name)
            counts[row.Gender] = int(row.Count)
        index[int(year)] = NamePopularityRecord(
            most_popular=most_popular,
            counts=counts,
            year=int(year),
            source=SOURCE,
            source_url=SOURCE_URL,
        )
    if index:
        logger.info(f"Built baby name index for {min(index)}-{max(index)} ({len(index)} years)")
    else:
        logger.warning("Baby names data produced no usable rows")
    return index
