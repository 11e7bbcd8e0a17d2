"""
Border Crossing Data Reader (Imperative Shell)

Locates the dataset CSV on disk and converts it into ``Observation``
records for the Functional Core.

Package Location: src/bordercross/data/reader.py

Source format (BTS "Border Crossing Entry Data"):
    Port Name, State, Port Code, Border, Date, Measure, Value,
    Latitude, Longitude, Point

Only ``Border``, ``Date``, ``Measure`` and ``Value`` are read.  ``Date`` is
kept as the raw ``'<Mon> <YYYY>'`` string; parsing it is the core's job so
that malformed dates follow the core's drop-and-continue policy.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from ..analysis.records import BorderCrossingError, Observation
from ..config import DATASET_GLOB

log = logging.getLogger(__name__)

_REQUIRED_COLUMNS: List[str] = ["Border", "Date", "Measure", "Value"]


class DatasetNotFoundError(BorderCrossingError, FileNotFoundError):
    """No dataset CSV could be located."""


class DatasetFormatError(BorderCrossingError, ValueError):
    """The dataset CSV lacks one or more required columns."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_dataset_csv(directory: Path, pattern: str = DATASET_GLOB) -> Path:
    """
    Return the most recently modified CSV in *directory* matching *pattern*.

    Args:
        directory: Folder to search (non-recursive).
        pattern: Glob pattern.  Default ``'Border_Crossing*.csv'``.

    Returns:
        Path to the CSV.

    Raises:
        DatasetNotFoundError: If *directory* is missing or has no match.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise DatasetNotFoundError(f"Data directory not found: {directory}")

    matches = sorted(
        (p for p in directory.glob(pattern) if p.is_file()),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )
    if not matches:
        raise DatasetNotFoundError(
            f"No file matching '{pattern}' in {directory}. "
            f"Run 'bordercross fetch' first."
        )
    return matches[0]


def read_observations(csv_path: Path) -> List[Observation]:
    """
    Read the dataset CSV into ``Observation`` records.

    Args:
        csv_path: Path to the Border Crossing Entry Data CSV.

    Returns:
        List of observations, in file order.

    Raises:
        DatasetNotFoundError: If *csv_path* does not exist.
        DatasetFormatError: If a required column is missing, or the file
            cannot be parsed as CSV.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise DatasetNotFoundError(f"Dataset not found: {csv_path}")

    try:
        header = pd.read_csv(csv_path, nrows=0).columns
        missing = [c for c in _REQUIRED_COLUMNS if c not in header]
        if missing:
            raise DatasetFormatError(
                f"{csv_path.name}: missing required columns: {missing}"
            )

        df = pd.read_csv(
            csv_path,
            usecols=_REQUIRED_COLUMNS,
            dtype={"Border": "string", "Date": "string", "Measure": "string"},
            thousands=",",
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise DatasetFormatError(f"{csv_path.name}: unreadable CSV ({exc})") from exc

    log.info("Read %d rows from %s", len(df), csv_path.name, extra={"path": str(csv_path)})
    return observations_from_frame(df)


def observations_from_frame(df: pd.DataFrame) -> List[Observation]:
    """
    Convert a DataFrame with ``Border, Date, Measure, Value`` columns into
    ``Observation`` records.

    Rows with a missing label, or a missing, non-numeric, negative or
    fractional ``Value``, violate the input contract and are dropped with a
    warning.

    Args:
        df: Source rows.  Extra columns are ignored.

    Returns:
        List of observations.

    Raises:
        DatasetFormatError: If a required column is missing.
    """
    missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise DatasetFormatError(f"missing required columns: {missing}")

    out = df[_REQUIRED_COLUMNS].copy()
    out["Value"] = pd.to_numeric(out["Value"], errors="coerce")

    valid = (
        out[["Border", "Date", "Measure", "Value"]].notna().all(axis=1)
        & (out["Value"] >= 0)
        & (out["Value"] % 1 == 0)
    )
    n_bad = int((~valid).sum())
    if n_bad:
        log.warning(
            "Dropping %d row(s) with missing labels or invalid values", n_bad,
            extra={"dropped": n_bad},
        )
    out = out.loc[valid]

    return [
        Observation(
            border=str(border).strip(),
            date=str(date).strip(),
            measure=str(measure).strip(),
            value=int(value),
        )
        for border, date, measure, value in out.itertuples(index=False, name=None)
    ]


def load_observations(
    csv_path: Optional[Path] = None,
    data_dir: Optional[Path] = None,
) -> List[Observation]:
    """
    Read observations from an explicit CSV, or the newest one in *data_dir*.

    Args:
        csv_path: Explicit dataset path; takes precedence.
        data_dir: Directory searched with ``find_dataset_csv``.

    Raises:
        ValueError: If neither argument is given.
    """
    if csv_path is None:
        if data_dir is None:
            raise ValueError("Provide csv_path or data_dir")
        csv_path = find_dataset_csv(data_dir)
    return read_observations(csv_path)
