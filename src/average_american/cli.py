from __future__ import annotations

import logging
from pathlib import Path

import click

from average_american.config import get_settings
from average_american.data.baby_names import build_name_index, download_baby_names, read_baby_names_csv
from average_american.data.census import download_census, parse_census_workbook
from average_american.data.store import (
    latest_year,
    load_name_index,
    load_year_records,
    save_name_index,
    save_year_records,
    select_year,
)
from average_american.errors import AverageAmericanError
from average_american.models import Gender
from average_american.profile import compose, compose_all, render_profiles
from average_american.table import build_table, render_table

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _parse_gender(ctx, param, value):
    if value is None:
        return None
    try:
        return Gender.parse(value)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def fetch_and_parse() -> None:
    """Download the census workbook, parse it, and save the year-indexed records."""
    settings = get_settings()
    click.echo("Downloading Census data...")
    file_path = download_census(settings.census_url, settings.cache_dir, timeout=settings.request_timeout)
    click.echo(f"Downloaded to {file_path}")

    click.echo("Parsing Excel file...")
    records = parse_census_workbook(file_path)
    click.echo(f"Parsed data for years: {', '.join(str(y) for y in sorted(records))}")

    click.echo("Saving parsed data...")
    save_year_records(records, settings.census_parsed_file)
    click.echo("Data saved successfully!")


def build_names(names_csv: Path | None) -> None:
    """Build the baby-name index from Kaggle (or a local NationalNames.csv) and save it."""
    settings = get_settings()
    if names_csv is not None:
        click.echo(f"Reading {names_csv}...")
        names = read_baby_names_csv(names_csv)
    else:
        click.echo(f"Downloading {settings.baby_names_file_name} from Kaggle...")
        names = download_baby_names(settings.baby_names_dataset, settings.baby_names_file_name)

    index = build_name_index(names)
    out = save_name_index(index, settings.baby_names_file)
    if index:
        click.echo(f"Saved baby name data to {out}")
        click.echo(f"Years: {min(index)} - {max(index)}")
    click.echo(f"Total years: {len(index)}")


def show(year: int | None, gender: Gender | None, table: bool) -> str:
    settings = get_settings()
    records = load_year_records(settings.census_parsed_file)
    names = load_name_index(settings.baby_names_file)

    if table:
        years = [year] if year is not None else sorted(records)
        return render_table(build_table(years, records, names))

    if year is None:
        year = latest_year(records)
    record = select_year(records, year)
    if gender is not None:
        profiles = [compose(record, year, names, fixed_gender=gender)]
    else:
        profiles = list(compose_all(record, year, names))
    return render_profiles(profiles, year)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--year", type=int, default=None, help="Show the average American for a specific year (default: latest)")
@click.option(
    "--gender",
    callback=_parse_gender,
    default=None,
    metavar="male|female",
    help="Show only the average man or woman",
)
@click.option("--table", is_flag=True, help="Show a table of every stored year (or just --year)")
@click.option("--fetch", is_flag=True, help="Download and parse the latest Census data")
@click.option("--fetch-names", is_flag=True, help="Build the baby name index from the SSA data on Kaggle")
@click.option(
    "--names-csv",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Local NationalNames.csv to use with --fetch-names",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(
    year: int | None,
    gender: Gender | None,
    table: bool,
    fetch: bool,
    fetch_names: bool,
    names_csv: Path | None,
    verbose: bool,
):
    """Describe the average American from Census and SSA baby-name data.

    \b
    Examples:
      average-american
      average-american --year=2023
      average-american --gender=female
      average-american --table
      average-american --fetch
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if table and gender is not None:
        raise click.ClickException("--table always shows both genders; drop --gender")

    try:
        if fetch or fetch_names:
            if fetch:
                fetch_and_parse()
            if fetch_names:
                build_names(names_csv)
            return
        click.echo(show(year, gender, table))
    except AverageAmericanError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    cli()
