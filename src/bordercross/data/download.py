"""
Dataset Acquisition (Imperative Shell)

Downloads the Border Crossing Entry Data export and, when the download is
a zip archive, extracts the CSV it contains.

Package Location: src/bordercross/data/download.py
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from urllib.parse import urlparse

import requests

from ..config import DATASET_FILENAME, DATASET_GLOB
from .reader import DatasetNotFoundError, find_dataset_csv

log = logging.getLogger(__name__)

_CHUNK_SIZE = 2 * 1024 * 1024
_USER_AGENT = "bordercross/0.1 (dataset download)"


def download_dataset(url: str, dest_dir: Path, *, timeout: float = 60.0) -> Path:
    """
    Stream *url* to a file in *dest_dir*.

    The file name comes from the URL path for a ``.zip`` archive or a CSV
    already named ``Border_Crossing*.csv``; anything else (including the
    BTS export's ``rows.csv``) is saved as ``Border_Crossing_Entry_Data.csv``
    so that ``find_dataset_csv`` picks it up.  The
    payload is written to a ``.part`` file first and renamed on success so
    an interrupted download never leaves a truncated dataset behind.

    Args:
        url: Dataset or archive URL.
        dest_dir: Target directory (created if needed).
        timeout: Per-request timeout in seconds.

    Returns:
        Path to the downloaded file.

    Raises:
        requests.HTTPError: On a non-2xx response.
    """
    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest = dest_dir / _filename_from_url(url)
    partial = dest.with_name(dest.name + ".part")

    log.info("Downloading %s", url, extra={"url": url, "dest": str(dest)})
    with requests.get(
        url, stream=True, timeout=timeout, headers={"User-Agent": _USER_AGENT}
    ) as r:
        r.raise_for_status()
        try:
            with partial.open("wb") as fh:
                for chunk in r.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
        except BaseException:
            partial.unlink(missing_ok=True)
            raise

    partial.replace(dest)
    log.info("Saved %s (%d bytes)", dest.name, dest.stat().st_size)
    return dest


def extract_csv(archive_path: Path, dest_dir: Path) -> Path:
    """
    Extract the single ``Border_Crossing*.csv`` member of a zip archive.

    Directory structure inside the archive is flattened.

    Args:
        archive_path: Zip file to read.
        dest_dir: Directory to write the CSV into.

    Returns:
        Path to the extracted CSV.

    Raises:
        ValueError: If the archive has no matching member, or more than one.
    """
    archive_path = Path(archive_path)
    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(archive_path) as zf:
        members = [
            n for n in zf.namelist()
            if not n.endswith("/") and Path(n).match(DATASET_GLOB)
        ]
        if len(members) != 1:
            raise ValueError(
                f"{archive_path.name} must contain exactly one '{DATASET_GLOB}' "
                f"file; found {members}"
            )
        member = members[0]
        target = dest_dir / Path(member).name
        with zf.open(member) as src, target.open("wb") as dst:
            while True:
                block = src.read(_CHUNK_SIZE)
                if not block:
                    break
                dst.write(block)

    log.info("Extracted %s from %s", target.name, archive_path.name)
    return target


def fetch_dataset(
    url: str,
    dest_dir: Path,
    *,
    force: bool = False,
    timeout: float = 60.0,
) -> Path:
    """
    Ensure a dataset CSV exists in *dest_dir*, downloading it if needed.

    Args:
        url: Dataset or archive URL.
        dest_dir: Data directory.
        force: Re-download even if a CSV is already present.
        timeout: Per-request timeout in seconds.

    Returns:
        Path to the dataset CSV.
    """
    dest_dir = Path(dest_dir)
    if not force:
        try:
            existing = find_dataset_csv(dest_dir)
        except DatasetNotFoundError:
            pass
        else:
            log.info("Using cached dataset %s", existing)
            return existing

    downloaded = download_dataset(url, dest_dir, timeout=timeout)
    if zipfile.is_zipfile(downloaded):
        csv_path = extract_csv(downloaded, dest_dir)
        downloaded.unlink()
        return csv_path
    return downloaded


def _filename_from_url(url: str) -> str:
    name = Path(urlparse(url).path).name
    if name.lower().endswith(".zip") or Path(name).match(DATASET_GLOB):
        return name
    return DATASET_FILENAME
