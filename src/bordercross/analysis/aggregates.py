"""
Border Crossing Aggregations (Functional Core)

Pure functions only. No I/O, no side effects.
Input/output is tuples of records; pandas is used internally for the
group-and-reduce steps.

Three granularities are produced from the filtered rows of one border:

    monthly   : exact integer sum per month, reported in millions
    yearly    : mean of the monthly totals over the months present
    periods   : total/mean/max/min of annual totals per 4-year window

Missing-Month Rule:
    A month with no rows produces no ``MonthlyPoint``.  Yearly means are
    taken over the months that exist, never over 12, and a year only counts
    towards a 4-year window if it has at least one month.  Windows with
    fewer than 4 years are dropped (see ``EmptyPeriodWindowError``).

Package Location: src/bordercross/analysis/aggregates.py
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd

from .records import (
    MILLIONS,
    PERIOD_ANCHOR_YEAR,
    PERIOD_LENGTH_YEARS,
    DatedObservation,
    MonthlyPoint,
    PeriodSummary,
    YearlyAverage,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def monthly_totals(rows: Sequence[DatedObservation]) -> Tuple[MonthlyPoint, ...]:
    """
    Sum crossings per month across all measures in *rows*.

    Distinct transportation modes are merged into one total per month; no
    per-measure breakdown survives this step.  The sum is taken over integer
    counts, so ``MonthlyPoint.crossings`` is exact and ``total`` is that sum
    divided by one million.

    Args:
        rows: Border- and measure-filtered observations for one border.

    Returns:
        Tuple of ``MonthlyPoint`` in chronological order, one per month that
        has at least one row.  Empty tuple for empty input.
    """
    if not rows:
        return ()

    df = pd.DataFrame({
        "month": [r.month for r in rows],
        "value": np.fromiter((r.value for r in rows), dtype=np.int64, count=len(rows)),
    })
    sums = df.groupby("month", sort=True)["value"].sum()

    return tuple(
        MonthlyPoint(month=month, total=int(crossings) / MILLIONS, crossings=int(crossings))
        for month, crossings in sums.items()
    )


def annual_totals(monthly: Sequence[MonthlyPoint]) -> Dict[int, float]:
    """
    Sum the monthly totals (millions) of each calendar year.

    Args:
        monthly: Output of ``monthly_totals``.

    Returns:
        ``{year: total}`` ordered by year.
    """
    stats = _year_stats(monthly)
    return {int(year): float(row.total) for year, row in stats.iterrows()}


def yearly_averages(monthly: Sequence[MonthlyPoint]) -> Tuple[YearlyAverage, ...]:
    """
    Average monthly crossings per year.

    The mean is ``annual_total / months_present``: a partial year (e.g. the
    current one) is averaged over the months observed, with no zero-filling
    of missing months.

    Args:
        monthly: Output of ``monthly_totals``.

    Returns:
        Tuple of ``YearlyAverage`` ordered by year.
    """
    stats = _year_stats(monthly)
    return tuple(
        YearlyAverage(
            year=int(year),
            avg_monthly=float(row.total) / int(row.months),
            months=int(row.months),
        )
        for year, row in stats.iterrows()
    )


def period_start(year: int) -> int:
    """First year of the 4-year window containing *year* (anchored at 1996)."""
    offset = (year - PERIOD_ANCHOR_YEAR) // PERIOD_LENGTH_YEARS
    return PERIOD_ANCHOR_YEAR + PERIOD_LENGTH_YEARS * offset


def summarize_periods(annual: Mapping[int, float]) -> Tuple[PeriodSummary, ...]:
    """
    Roll annual totals up into complete 4-year windows.

    Args:
        annual: ``{year: annual_total}`` as returned by ``annual_totals``.

    Returns:
        Tuple of ``PeriodSummary`` ordered by window start.  Windows that
        do not contain exactly 4 years are omitted.
    """
    if not annual:
        return ()

    totals = pd.Series(annual, dtype=float).sort_index()
    starts = np.array([period_start(int(y)) for y in totals.index], dtype=np.int64)

    summaries = []
    for start, window in totals.groupby(starts, sort=True):
        start = int(start)
        if window.size != PERIOD_LENGTH_YEARS:
            log.debug(
                "Skipping incomplete window %d-%d (%d of %d years)",
                start, start + PERIOD_LENGTH_YEARS - 1,
                window.size, PERIOD_LENGTH_YEARS,
            )
            continue
        total = float(window.sum())
        summaries.append(
            PeriodSummary(
                start=start,
                end=start + PERIOD_LENGTH_YEARS - 1,
                total=total,
                mean_annual=total / PERIOD_LENGTH_YEARS,
                max_annual=float(window.max()),
                min_annual=float(window.min()),
            )
        )
    return tuple(summaries)


def period_summaries(monthly: Sequence[MonthlyPoint]) -> Tuple[PeriodSummary, ...]:
    """
    4-year window statistics derived directly from the monthly series.

    Annual totals are re-summed from ``monthly`` rather than reconstructed
    from ``YearlyAverage`` (average * months) to avoid compounding rounding.

    Args:
        monthly: Output of ``monthly_totals``.

    Returns:
        See ``summarize_periods``.
    """
    return summarize_periods(annual_totals(monthly))


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _year_stats(monthly: Sequence[MonthlyPoint]) -> pd.DataFrame:
    """
    Per-year sum of ``total`` and count of months present.

    Shared by ``annual_totals`` and ``yearly_averages`` so that
    ``avg_monthly * months`` always reproduces the same annual total.

    Returns:
        DataFrame indexed by year with columns ``total`` and ``months``.
    """
    if not monthly:
        return pd.DataFrame(
            {"total": pd.Series(dtype=float), "months": pd.Series(dtype=np.int64)}
        )

    df = pd.DataFrame({
        "year": [p.month.year for p in monthly],
        "total": [p.total for p in monthly],
    })
    return (
        df.groupby("year", sort=True)["total"]
        .agg(total="sum", months="count")
    )
