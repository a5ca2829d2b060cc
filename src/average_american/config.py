from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root if present
load_dotenv(dotenv_path=Path(__file__).resolve().parents[2] / ".env", override=False)

CENSUS_URL = (
    "https://www2.census.gov/programs-surveys/popest/tables/2020-2024/national/asrh/nc-est2024-agesex.xlsx"
)


@dataclass(frozen=True)
class Settings:
    # Data paths
    data_dir: Path = Path(os.getenv("DATA_DIR", Path(__file__).resolve().parents[2] / "data"))

    # Census Bureau population estimates (age and sex, national)
    census_url: str = os.getenv("CENSUS_URL", CENSUS_URL)
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "60"))

    # SSA baby names (via Kaggle)
    baby_names_dataset: str = os.getenv("BABY_NAMES_DATASET", "kaggle/us-baby-names")
    baby_names_file_name: str = os.getenv("BABY_NAMES_CSV", "NationalNames.csv")

    @property
    def cache_dir(self) -> Path:
        return self.data_dir / "cache"

    @property
    def census_parsed_file(self) -> Path:
        return self.data_dir / "census_parsed.json"

    @property
    def baby_names_file(self) -> Path:
        return self.data_dir / "baby_names.json"


def get_settings() -> Settings:
    return Settings()
