import pytest

from average_american.models import NamePopularityRecord, YearRecord


@pytest.fixture
def record():
    return YearRecord.from_dict({
        "gender": {"distribution": {"Female": 51.1, "Male": 48.9}},
        "age": {"median": 38.9},
    })


@pytest.fixture
def record_by_gender():
    return YearRecord.from_dict({
        "gender": {"distribution": {"Female": 50.5, "Male": 49.5}},
        "age": {"median": 39.1, "by_gender": {"Male": 38.0, "Female": 40.2}},
    })


@pytest.fixture
def baby_names():
    def rec(year, male, female):
        return NamePopularityRecord.from_dict(
            {"baby_name": {"year": year, "most_popular": {"Male": male, "Female": female}}}
        )

    return {
        1984: rec(1984, "Michael", "Jennifer"),
        1985: rec(1985, "Michael", "Jessica"),
        1986: rec(1986, "Michael", "Jessica"),
    }
