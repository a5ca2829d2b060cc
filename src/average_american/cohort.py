"""Link a computed age back to a birth cohort and that cohort's top baby name."""
from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Optional

from average_american.stats import round_half_up

if TYPE_CHECKING:
    from average_american.models import Gender, NamePopularityRecord


def resolve_birth_year(reference_year: int, age: float) -> int:
    """Implied birth year, rounded half away from zero (38.5 in 2024 -> 1986)."""
    return int(round_half_up(reference_year - age))


def resolve_name(
    name_popularity: Mapping[int, "NamePopularityRecord"],
    birth_year: int,
    gender: Optional["Gender"],
) -> Optional[str]:
    if gender is None:
        return None
    record = name_popularity.get(birth_year)
    if record is None:
        return None
    return record.name_for(gender)
