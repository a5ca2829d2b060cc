"""Error kinds raised by the loaders and the profile composer."""
from __future__ import annotations

from typing import Iterable, Optional


class AverageAmericanError(Exception):
    """Base class for every condition the CLI reports and exits on."""


class MissingStoreError(AverageAmericanError):
    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "No census data found. Run with --fetch to download the latest estimates from census.gov."
        )


class YearNotFoundError(AverageAmericanError):
    def __init__(self, year: int, available: Iterable[int] = ()):
        self.year = year
        self.available = sorted(available)
        message = f"No data available for year {year}"
        if self.available:
            message += f" (available: {self.available[0]}-{self.available[-1]})"
        super().__init__(message)


class MalformedInputError(AverageAmericanError):
    pass


class FetchError(AverageAmericanError):
    pass
