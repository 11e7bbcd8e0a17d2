"""Project configuration (dataset location, output paths, defaults)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Tuple

from .analysis.records import Border

# Bureau of Transportation Statistics "Border Crossing Entry Data" export.
DATASET_URL: str = "https://data.bts.gov/api/views/keg4-3bc2/rows.csv?accessType=DOWNLOAD"
DATASET_FILENAME: str = "Border_Crossing_Entry_Data.csv"
DATASET_GLOB: str = "Border_Crossing*.csv"

# Environment overrides
ENV_DATA_URL: str = "BORDERCROSS_DATA_URL"
ENV_DATA_DIR: str = "BORDERCROSS_DATA_DIR"

DEFAULT_DATA_DIR: Path = Path("data") / "raw"
DEFAULT_OUTPUT_DIR: Path = Path("outputs")

DEFAULT_BORDERS: Tuple[Border, ...] = (Border.CANADA, Border.MEXICO)

# Presentation-only rounding for summary tables.
TABLE_DECIMALS: int = 2


def resolve_data_url(override: Optional[str] = None) -> str:
    """CLI flag > ``BORDERCROSS_DATA_URL`` > ``DATASET_URL``."""
    if override:
        return override
    return os.getenv(ENV_DATA_URL, "").strip() or DATASET_URL


def resolve_data_dir(override: Optional[Path] = None) -> Path:
    """CLI flag > ``BORDERCROSS_DATA_DIR`` > ``DEFAULT_DATA_DIR``."""
    if override:
        return Path(override)
    env_dir = os.getenv(ENV_DATA_DIR, "").strip()
    return Path(env_dir) if env_dir else DEFAULT_DATA_DIR
