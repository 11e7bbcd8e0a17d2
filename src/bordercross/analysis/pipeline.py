"""
Border Analysis Pipeline (Functional Core)

Composes the filters and aggregations into a single ``analyze`` call per
border, plus the DataFrame projections used by the presentation layer.

    rows -> select_border -> select_personal_travel -> monthly_totals
         -> {yearly_averages, period_summaries}

``analyze`` is a pure function of ``(rows, border)``: the row set is passed
in explicitly on every call and the result is a fresh, immutable
``BorderAnalysis``.  Callers read ``monthly`` / ``yearly`` / ``periods`` off
the one result instead of re-running the pipeline per field.

Package Location: src/bordercross/analysis/pipeline.py
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Union

import pandas as pd

from .aggregates import monthly_totals, period_summaries, yearly_averages
from .filters import select_border, select_personal_travel
from .records import (
    Border,
    BorderAnalysis,
    MonthlyPoint,
    Observation,
    PeriodSummary,
    YearlyAverage,
    border_key,
)

log = logging.getLogger(__name__)

_PERIOD_COLUMNS = ["Period", "Total", "Mean Annual", "Max Annual", "Min Annual"]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def analyze(rows: Iterable[Observation], border: Union[str, Border]) -> BorderAnalysis:
    """
    Run the full aggregation pipeline for one border.

    A border that matches no rows is not an error: the result simply has
    empty ``monthly``, ``yearly`` and ``periods`` sequences.

    Args:
        rows: Raw observations (any order, any borders/measures).
        border: Target border label, short form or ``Border`` member.

    Returns:
        ``BorderAnalysis`` for *border*.
    """
    label = border.value if isinstance(border, Border) else str(border)

    border_rows = select_border(rows, label)
    personal = select_personal_travel(border_rows)
    monthly = monthly_totals(personal)

    if not monthly:
        log.warning("No personal-travel rows for border %r", label, extra={"border": label})
        return BorderAnalysis(border=label)

    result = BorderAnalysis(
        border=label,
        monthly=monthly,
        yearly=yearly_averages(monthly),
        periods=period_summaries(monthly),
    )
    log.info(
        "Analyzed %s: %d months, %d years, %d complete periods",
        label, len(result.monthly), len(result.yearly), len(result.periods),
        extra={"border": label, "rows": len(personal)},
    )
    return result


def analyze_borders(
    rows: Sequence[Observation],
    borders: Optional[Iterable[Union[str, Border]]] = None,
) -> Dict[str, BorderAnalysis]:
    """
    Analyze several borders over the same row set, one ``analyze`` per border.

    Args:
        rows: Raw observations.  Must be re-iterable (a list or tuple).
        borders: Borders to analyze.  Defaults to every ``Border`` member.

    Returns:
        ``{border_label: BorderAnalysis}`` in the order requested.  Spellings
        of an already requested border (``US-Mexico`` after
        ``US-Mexico Border``) are skipped.
    """
    targets = list(borders) if borders is not None else list(Border)
    results: Dict[str, BorderAnalysis] = {}
    seen = set()
    for border in targets:
        key = border_key(border.value if isinstance(border, Border) else border)
        if key in seen:
            continue
        seen.add(key)
        analysis = analyze(rows, border)
        results[analysis.border] = analysis
    return results


# ---------------------------------------------------------------------------
# DataFrame projections (presentation helpers)
# ---------------------------------------------------------------------------

def monthly_frame(monthly: Sequence[MonthlyPoint]) -> pd.DataFrame:
    """Monthly series as a DataFrame with a ``Month`` datetime column."""
    return pd.DataFrame({
        "Month": pd.to_datetime([p.month for p in monthly]),
        "Total": [p.total for p in monthly],
        "Crossings": pd.array([p.crossings for p in monthly], dtype="int64"),
    })


def yearly_frame(yearly: Sequence[YearlyAverage]) -> pd.DataFrame:
    """Yearly averages as a DataFrame."""
    return pd.DataFrame({
        "Year": pd.array([y.year for y in yearly], dtype="int64"),
        "Average Monthly": [y.avg_monthly for y in yearly],
        "Months": pd.array([y.months for y in yearly], dtype="int64"),
    })


def period_table(
    periods: Sequence[PeriodSummary],
    decimals: Optional[int] = 2,
) -> pd.DataFrame:
    """
    Period summaries as a display table.

    Rounding is applied to the returned copy only; the ``PeriodSummary``
    records are never modified, so no rounded value flows back into
    computation.

    Args:
        periods: Output of ``period_summaries``.
        decimals: Decimal places for display, or ``None`` for full precision.

    Returns:
        DataFrame with columns ``Period, Total, Mean Annual, Max Annual,
        Min Annual``.
    """
    table = pd.DataFrame(
        [
            (p.period_label, p.total, p.mean_annual, p.max_annual, p.min_annual)
            for p in periods
        ],
        columns=_PERIOD_COLUMNS,
    )
    if decimals is not None:
        table = table.round(decimals)
    return table
