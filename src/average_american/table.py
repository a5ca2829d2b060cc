from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import List, Mapping, Optional, Sequence

import pandas as pd

from average_american.errors import YearNotFoundError
from average_american.models import CompositeProfile, NamePopularityRecord, YearRecord
from average_american.profile import compose_all, format_age

NA = "N/A"

COLUMN_LABELS = {
    "year": "Year",
    "name": "Name",
    "gender": "Gender",
    "age": "Age",
    "birth_year": "Born",
    "man_name": "Man",
    "man_age": "Age (M)",
    "man_birth_year": "Born (M)",
    "woman_name": "Woman",
    "woman_age": "Age (F)",
    "woman_birth_year": "Born (F)",
}


@dataclass(frozen=True)
class TableRow:
    year: int
    name: str
    gender: str
    age: str
    birth_year: str
    man_name: str
    man_age: str
    man_birth_year: str
    woman_name: str
    woman_age: str
    woman_birth_year: str


def _cells(profile: CompositeProfile) -> tuple[str, str, str]:
    birth_year: Optional[int] = profile.birth_year
    return (
        profile.name or NA,
        format_age(profile.age) or NA,
        str(birth_year) if birth_year is not None else NA,
    )


def build_table(
    years: Sequence[int],
    records: Mapping[int, YearRecord],
    name_popularity: Optional[Mapping[int, NamePopularityRecord]] = None,
) -> List[TableRow]:
    """One row per year, in the order given. Every year must be present in ``records``."""
    missing = [y for y in years if y not in records]
    if missing:
        raise YearNotFoundError(missing[0], records.keys())

    rows: List[TableRow] = []
    for year in years:
        overall, man, woman = compose_all(records[year], year, name_popularity)
        name, age, born = _cells(overall)
        man_name, man_age, man_born = _cells(man)
        woman_name, woman_age, woman_born = _cells(woman)
        rows.append(
            TableRow(
                year=year,
                name=name,
                gender=str(overall.gender) if overall.gender is not None else NA,
                age=age,
                birth_year=born,
                man_name=man_name,
                man_age=man_age,
                man_birth_year=man_born,
                woman_name=woman_name,
                woman_age=woman_age,
                woman_birth_year=woman_born,
            )
        )
    return rows


def table_frame(rows: Sequence[TableRow]) -> pd.DataFrame:
    frame = pd.DataFrame([asdict(r) for r in rows], columns=list(COLUMN_LABELS))
    return frame.rename(columns=COLUMN_LABELS)


def render_table(rows: Sequence[TableRow]) -> str:
    if not rows:
        return "No years to show."
    return table_frame(rows).to_string(index=False)
