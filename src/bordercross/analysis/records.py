"""
Border Crossing Records (Functional Core)

Typed, immutable records passed between the pipeline stages, the domain
error hierarchy, and the constants that define personal travel and the
4-year reporting window.

Package Location: src/bordercross/analysis/records.py
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Tuple

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Transportation modes that carry individual travellers.  Freight and
# commercial modes (Trucks, Rail Containers, ...) are excluded.
PERSONAL_TRAVEL_MEASURES: frozenset = frozenset({
    "Pedestrians",
    "Personal Vehicle Passengers",
    "Bus Passengers",
    "Train Passengers",
})

MILLIONS: int = 1_000_000

# 4-year summary windows: 1996-1999, 2000-2003, ...
PERIOD_ANCHOR_YEAR: int = 1996
PERIOD_LENGTH_YEARS: int = 4


class Border(str, Enum):
    """Border labels as they appear in the source dataset."""

    CANADA = "US-Canada Border"
    MEXICO = "US-Mexico Border"

    @property
    def short_name(self) -> str:
        return border_key(self.value)


def border_key(label: str) -> str:
    """Canonical match key for a border label.

    ``'US-Mexico Border'``, ``'US-Mexico'`` and ``'us-mexico'`` all map to
    ``'us-mexico'``.
    """
    text = str(label).strip()
    if text.lower().endswith(" border"):
        text = text[: -len(" border")]
    return text.strip().lower()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BorderCrossingError(Exception):
    """Base class for all border crossing analysis errors."""


class MalformedDateError(BorderCrossingError, ValueError):
    """A row's date is not in ``'<Mon> <YYYY>'`` form.

    Raised by ``parse_month``.  The border filter catches it and drops the
    row; a single bad row never aborts an analysis.
    """


class UnknownBorderError(BorderCrossingError, LookupError):
    """A border name matches none of the known ``Border`` labels.

    Only raised by the strict ``resolve_border`` lookup.  ``analyze`` treats
    a border with no rows as an empty result instead.
    """


class EmptyPeriodWindowError(BorderCrossingError):
    """Never raised.

    Incomplete 4-year windows are dropped from ``period_summaries`` rather
    than reported, so partial-period statistics are never displayed.  The
    class exists so the policy has a name in tracebacks and documentation.
    """


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Observation:
    """One raw source row: a port-month-measure count."""

    border: str
    date: str
    measure: str
    value: int


@dataclass(frozen=True)
class DatedObservation:
    """An ``Observation`` whose date is normalised to the 1st of its month."""

    border: str
    month: date
    measure: str
    value: int


@dataclass(frozen=True)
class MonthlyPoint:
    """Personal-travel crossings for one border in one month.

    ``crossings`` is the exact integer sum; ``total`` is the same figure in
    millions.
    """

    month: date
    total: float
    crossings: int


@dataclass(frozen=True)
class YearlyAverage:
    """Mean of the monthly totals over the months observed in ``year``."""

    year: int
    avg_monthly: float
    months: int


@dataclass(frozen=True)
class PeriodSummary:
    """Statistics over the annual totals of one complete 4-year window."""

    start: int
    end: int
    total: float
    mean_annual: float
    max_annual: float
    min_annual: float

    @property
    def period_label(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class BorderAnalysis:
    """Everything ``analyze`` derives for one border."""

    border: str
    monthly: Tuple[MonthlyPoint, ...] = ()
    yearly: Tuple[YearlyAverage, ...] = ()
    periods: Tuple[PeriodSummary, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.monthly
