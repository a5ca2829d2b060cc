"""
Record types for year-indexed demographic and baby-name data.

Persisted JSON uses the plain labels "Male"/"Female" as keys; in memory those
become ``Gender`` members. Conversion happens only in the ``from_dict`` and
``to_dict`` methods below.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from average_american.cohort import resolve_birth_year
from average_american.errors import MalformedInputError
from average_american.stats import mode

logger = logging.getLogger(__name__)


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"

    @classmethod
    def parse(cls, text: str) -> "Gender":
        cleaned = str(text).strip().lower()
        for member in cls:
            if member.value.lower() == cleaned:
                return member
        raise ValueError(f"Unknown gender: {text!r} (expected male or female)")

    def __str__(self) -> str:
        return self.value


def _gender_keyed(raw: Any, what: str) -> Dict[Gender, Any]:
    """Map label-keyed JSON onto Gender keys in canonical (declaration) order."""
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise MalformedInputError(f"{what} must be an object, got {type(raw).__name__}")
    parsed: Dict[Gender, Any] = {}
    for label, value in raw.items():
        try:
            parsed[Gender.parse(label)] = value
        except ValueError:
            logger.warning(f"Skipping unknown gender label {label!r} in {what}")
    return {g: parsed[g] for g in Gender if g in parsed}


def _as_number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        raise MalformedInputError(f"{what} must be a number, got {value!r}")
    return float(value)


def _as_age(value: Any, what: str) -> float:
    age = _as_number(value, what)
    if age < 0:
        raise MalformedInputError(f"{what} must not be negative, got {value!r}")
    return age


@dataclass(frozen=True)
class GenderDistribution:
    distribution: Dict[Gender, float] = field(default_factory=dict)
    source: Optional[str] = None
    year: Optional[int] = None

    def dominant(self) -> Optional[Gender]:
        # distribution is kept in canonical order, so a tie resolves to Male
        return mode(self.distribution)


@dataclass(frozen=True)
class AgeFigures:
    median: Optional[float]
    by_gender: Optional[Dict[Gender, float]] = None

    def for_gender(self, gender: Optional[Gender]) -> Optional[float]:
        if gender is not None and self.by_gender and gender in self.by_gender:
            return self.by_gender[gender]
        return self.median


@dataclass(frozen=True)
class YearRecord:
    gender: GenderDistribution
    age: AgeFigures

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "YearRecord":
        if not isinstance(data, Mapping):
            raise MalformedInputError(f"Year record must be an object, got {type(data).__name__}")
        age_block = data.get("age")
        if not isinstance(age_block, Mapping):
            raise MalformedInputError("Year record has no 'age' block")

        median = age_block.get("median")
        by_gender_raw = age_block.get("by_gender")
        by_gender = None
        if by_gender_raw:
            by_gender = {
                g: _as_age(v, f"age.by_gender.{g}")
                for g, v in _gender_keyed(by_gender_raw, "age.by_gender").items()
                if v is not None
            }
        age = AgeFigures(
            median=None if median is None else _as_age(median, "age.median"),
            by_gender=by_gender or None,
        )

        gender_block = data.get("gender") or {}
        if not isinstance(gender_block, Mapping):
            raise MalformedInputError(f"gender must be an object, got {type(gender_block).__name__}")
        distribution = {
            g: _as_number(v, f"gender.distribution.{g}")
            for g, v in _gender_keyed(gender_block.get("distribution"), "gender.distribution").items()
            if v is not None
        }
        gender = GenderDistribution(
            distribution=distribution,
            source=gender_block.get("source"),
            year=gender_block.get("year"),
        )
        return cls(gender=gender, age=age)

    def to_dict(self) -> Dict[str, Any]:
        age: Dict[str, Any] = {"median": self.age.median}
        if self.age.by_gender:
            age["by_gender"] = {g.value: v for g, v in self.age.by_gender.items()}
        return {
            "gender": {
                "source": self.gender.source,
                "year": self.gender.year,
                "distribution": {g.value: v for g, v in self.gender.distribution.items()},
            },
            "age": age,
        }


@dataclass(frozen=True)
class NamePopularityRecord:
    most_popular: Dict[Gender, Optional[str]] = field(default_factory=dict)
    counts: Dict[Gender, Optional[int]] = field(default_factory=dict)
    year: Optional[int] = None
    source: Optional[str] = None
    source_url: Optional[str] = None

    def name_for(self, gender: Gender) -> Optional[str]:
        return self.most_popular.get(gender)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NamePopularityRecord":
        block = data.get("baby_name") if isinstance(data, Mapping) else None
        if not isinstance(block, Mapping):
            raise MalformedInputError("Name record has no 'baby_name' block")
        most_popular = _gender_keyed(block.get("most_popular"), "baby_name.most_popular")
        for g, name in most_popular.items():
            if name is not None and not isinstance(name, str):
                raise MalformedInputError(f"baby_name.most_popular.{g} must be a string, got {name!r}")
        counts = _gender_keyed(block.get("counts"), "baby_name.counts")
        for g, count in counts.items():
            if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
                raise MalformedInputError(f"baby_name.counts.{g} must be an integer, got {count!r}")
        return cls(
            most_popular=most_popular,
            counts=counts,
            year=block.get("year"),
            source=block.get("source"),
            source_url=block.get("source_url"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baby_name": {
                "source": self.source,
                "source_url": self.source_url,
                "year": self.year,
                "most_popular": {g.value: self.most_popular.get(g) for g in Gender},
                "counts": {g.value: self.counts.get(g) for g in Gender},
            }
        }


@dataclass(frozen=True)
class CompositeProfile:
    gender: Optional[Gender]
    age: Optional[float]
    name: Optional[str]
    gender_fixed: bool
    reference_year: int

    @property
    def birth_year(self) -> Optional[int]:
        if self.age is None:
            return None
        return resolve_birth_year(self.reference_year, self.age)
