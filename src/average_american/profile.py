"""
Composite profile ("the average American") for a single year.

Unconditional profile: dominant gender plus the overall median age.
Gender-conditioned profile: the fixed gender plus that gender's median age,
falling back to the overall median when no breakdown is available.
"""
from __future__ import annotations

from typing import Iterable, Mapping, Optional

from average_american.cohort import resolve_birth_year, resolve_name
from average_american.errors import MalformedInputError
from average_american.models import CompositeProfile, Gender, NamePopularityRecord, YearRecord
from average_american.stats import round_half_up

TITLE = "The Average American"
TITLE_SUFFIXES = {Gender.MALE: " Man", Gender.FEMALE: " Woman"}


def compose(
    record: YearRecord,
    reference_year: int,
    name_popularity: Optional[Mapping[int, NamePopularityRecord]] = None,
    fixed_gender: Optional[Gender] = None,
) -> CompositeProfile:
    if record.age is None:
        raise MalformedInputError(f"Record for {reference_year} has no age figures")

    gender_fixed = fixed_gender is not None
    if gender_fixed:
        gender = fixed_gender
        age = record.age.for_gender(gender)
    else:
        gender = record.gender.dominant()
        # never the per-gender figure here, even when one exists for the mode
        age = record.age.median

    name = None
    if gender is not None and age is not None:
        birth_year = resolve_birth_year(reference_year, age)
        name = resolve_name(name_popularity or {}, birth_year, gender)

    return CompositeProfile(
        gender=gender,
        age=age,
        name=name,
        gender_fixed=gender_fixed,
        reference_year=reference_year,
    )


def compose_all(
    record: YearRecord,
    reference_year: int,
    name_popularity: Optional[Mapping[int, NamePopularityRecord]] = None,
) -> tuple[CompositeProfile, CompositeProfile, CompositeProfile]:
    """Unconditional, male-conditioned and female-conditioned profiles, in that order."""
    return (
        compose(record, reference_year, name_popularity),
        compose(record, reference_year, name_popularity, fixed_gender=Gender.MALE),
        compose(record, reference_year, name_popularity, fixed_gender=Gender.FEMALE),
    )


def title_for(profile: CompositeProfile) -> str:
    suffix = TITLE_SUFFIXES.get(profile.gender, "") if profile.gender_fixed else ""
    return f"{TITLE}{suffix}"


def format_age(age: Optional[float]) -> Optional[str]:
    if age is None:
        return None
    return f"{round_half_up(age, 1):.1f}"


def render_profile(profile: CompositeProfile) -> str:
    lines = [f"{title_for(profile)}:"]
    if profile.name is not None:
        lines.append(f"- Name: {profile.name}")
    lines.append(f"- Gender: {profile.gender if profile.gender is not None else ''}")
    age = format_age(profile.age)
    lines.append(f"- Age: {age} years old" if age is not None else "- Age: unknown")
    return "\n".join(lines)


def render_profiles(profiles: Iterable[CompositeProfile], year: int) -> str:
    blocks = [render_profile(p) for p in profiles]
    return "\n\n".join(blocks) + f"\n\n(Year: {year})"
