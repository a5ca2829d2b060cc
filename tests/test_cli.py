import json

import pytest
from click.testing import CliRunner

from average_american import cli as cli_module
from average_american.config import Settings

CENSUS = {
    "2022": {"gender": {"distribution": {"Female": 50.5, "Male": 49.5}}, "age": {"median": 36.9}},
    "2024": {
        "gender": {"distribution": {"Female": 50.4, "Male": 49.6}},
        "age": {"median": 39.1, "by_gender": {"Male": 38.0, "Female": 40.2}},
    },
}
NAMES = {
    "1985": {"baby_name": {"year": 1985, "most_popular": {"Male": "Michael", "Female": "Jessica"}}},
    "1986": {"baby_name": {"year": 1986, "most_popular": {"Male": "Michael", "Female": "Jessica"}}},
}


@pytest.fixture
def settings(tmp_path, monkeypatch):
    s = Settings(data_dir=tmp_path)
    monkeypatch.setattr(cli_module, "get_settings", lambda: s)
    return s


@pytest.fixture
def populated(settings):
    settings.census_parsed_file.write_text(json.dumps(CENSUS))
    settings.baby_names_file.write_text(json.dumps(NAMES))
    return settings


def test_help():
    result = CliRunner().invoke(cli_module.cli, ["-h"])
    assert result.exit_code == 0
    assert "--gender" in result.output


def test_latest_year_three_profiles(populated):
    result = CliRunner().invoke(cli_module.cli, [])
    assert result.exit_code == 0, result.output
    assert "The Average American:" in result.output
    assert "The Average American Man:" in result.output
    assert "The Average American Woman:" in result.output
    assert "(Year: 2024)" in result.output


def test_year_and_gender(populated):
    result = CliRunner().invoke(cli_module.cli, ["--year=2024", "--gender=FEMALE"])
    assert result.exit_code == 0, result.output
    # 2024 - 40.2 = 1983.8 -> 1984, not in the name data
    assert result.output.startswith("The Average American Woman:\n- Gender: Female\n- Age: 40.2 years old")

    # 2022 - 36.9 = 1985.1 -> 1985
    result = CliRunner().invoke(cli_module.cli, ["--year=2022", "--gender=male"])
    assert "- Name: Michael" in result.output
    assert "The Average American Woman" not in result.output


def test_bad_gender_exits_1(populated):
    result = CliRunner().invoke(cli_module.cli, ["--gender=other"])
    assert result.exit_code == 1
    assert "Unknown gender" in result.output


def test_unknown_year_exits_1(populated):
    result = CliRunner().invoke(cli_module.cli, ["--year=1999"])
    assert result.exit_code == 1
    assert "No data available for year 1999" in result.output


def test_missing_store_exits_1(settings):
    result = CliRunner().invoke(cli_module.cli, [])
    assert result.exit_code == 1
    assert "--fetch" in result.output


def test_works_without_names(settings):
    settings.census_parsed_file.write_text(json.dumps(CENSUS))
    result = CliRunner().invoke(cli_module.cli, ["--year=2022"])
    assert result.exit_code == 0, result.output
    assert "Name:" not in result.output


def test_table(populated):
    result = CliRunner().invoke(cli_module.cli, ["--table"])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert len(lines) == 3
    assert lines[1].lstrip().startswith("2022")
    assert lines[2].lstrip().startswith("2024")
    assert "Jessica" in lines[1]


def test_table_rejects_gender(populated):
    result = CliRunner().invoke(cli_module.cli, ["--table", "--gender=male"])
    assert result.exit_code == 1
    assert "--table" in result.output


def test_fetch_names_from_local_csv(settings, tmp_path):
    csv_path = tmp_path / "NationalNames.csv"
    csv_path.write_text("Id,Name,Year,Gender,Count\n1,Mary,1880,F,7065\n2,John,1880,M,9655\n")
    result = CliRunner().invoke(cli_module.cli, ["--fetch-names", "--names-csv", str(csv_path)])
    assert result.exit_code == 0, result.output
    saved = json.loads(settings.baby_names_file.read_text())
    assert saved["1880"]["baby_name"]["most_popular"] == {"Male": "John", "Female": "Mary"}


def test_fetch_uses_cached_workbook(settings, monkeypatch):
    from average_american.models import AgeFigures, Gender, GenderDistribution, YearRecord

    def fake_download(url, cache_dir, timeout=60):
        return cache_dir / "census_age_sex.xlsx"

    def fake_parse(path):
        return {2024: YearRecord(GenderDistribution({Gender.MALE: 49.6, Gender.FEMALE: 50.4}), AgeFigures(39.1))}

    monkeypatch.setattr(cli_module, "download_census", fake_download)
    monkeypatch.setattr(cli_module, "parse_census_workbook", fake_parse)
    result = CliRunner().invoke(cli_module.cli, ["--fetch"])
    assert result.exit_code == 0, result.output
    assert "Parsed data for years: 2024" in result.output
    assert json.loads(settings.census_parsed_file.read_text())["2024"]["age"]["median"] == 39.1


def test_corrupt_store_exits_1_with_message(settings):
    settings.census_parsed_file.write_text(json.dumps({
        "2024": {"gender": {"distribution": {"Male": "abc"}}, "age": {"median": 39.1}},
    }))
    result = CliRunner().invoke(cli_module.cli, [])
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "gender.distribution.Male" in result.output


def test_record_without_median_age(settings):
    settings.census_parsed_file.write_text(json.dumps({
        "2024": {"gender": {"distribution": {"Female": 50.4, "Male": 49.6}}, "age": {"median": None}},
    }))
    settings.baby_names_file.write_text(json.dumps(NAMES))
    result = CliRunner().invoke(cli_module.cli, ["--gender=female"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[:3] == [
        "The Average American Woman:",
        "- Gender: Female",
        "- Age: unknown",
    ]
    assert "Name:" not in result.output

    result = CliRunner().invoke(cli_module.cli, ["--table"])
    assert result.exit_code == 0, result.output
    assert "N/A" in result.output.splitlines()[1]
