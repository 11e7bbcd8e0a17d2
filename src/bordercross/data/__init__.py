"""
Border Crossing Data Package (Imperative Shell)

This package handles all I/O for the system: fetching the dataset and
reading it into ``Observation`` records.

Modules:
- download: Dataset download and zip extraction
- reader:   CSV discovery and conversion to records
"""

from .reader import (
    DatasetFormatError,
    DatasetNotFoundError,
    find_dataset_csv,
    load_observations,
    observations_from_frame,
    read_observations,
)
from .download import download_dataset, extract_csv, fetch_dataset

__all__ = [
    # Reader
    'DatasetFormatError',
    'DatasetNotFoundError',
    'find_dataset_csv',
    'load_observations',
    'observations_from_frame',
    'read_observations',
    # Download
    'download_dataset',
    'extract_csv',
    'fetch_dataset',
]
