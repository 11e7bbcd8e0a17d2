"""
Border Crossing Analysis Package (Functional Core)

This package contains pure transformation functions with no I/O.
All functions accept records (or sequences of them) and return new,
immutable records or DataFrames.

Modules:
- records:    Typed records, constants and the error hierarchy
- filters:    Border selection, month parsing, personal-travel filter
- aggregates: Monthly totals, yearly averages, 4-year period summaries
- pipeline:   ``analyze`` orchestrator and DataFrame projections
"""

from .records import (
    MILLIONS,
    PERIOD_ANCHOR_YEAR,
    PERIOD_LENGTH_YEARS,
    PERSONAL_TRAVEL_MEASURES,
    Border,
    BorderAnalysis,
    BorderCrossingError,
    DatedObservation,
    EmptyPeriodWindowError,
    MalformedDateError,
    MonthlyPoint,
    Observation,
    PeriodSummary,
    UnknownBorderError,
    YearlyAverage,
    border_key,
)

from .filters import (
    parse_month,
    resolve_border,
    select_border,
    select_personal_travel,
)

from .aggregates import (
    annual_totals,
    monthly_totals,
    period_start,
    period_summaries,
    summarize_periods,
    yearly_averages,
)

from .pipeline import (
    analyze,
    analyze_borders,
    monthly_frame,
    period_table,
    yearly_frame,
)

__all__ = [
    # Records
    'MILLIONS',
    'PERIOD_ANCHOR_YEAR',
    'PERIOD_LENGTH_YEARS',
    'PERSONAL_TRAVEL_MEASURES',
    'Border',
    'BorderAnalysis',
    'BorderCrossingError',
    'DatedObservation',
    'EmptyPeriodWindowError',
    'MalformedDateError',
    'MonthlyPoint',
    'Observation',
    'PeriodSummary',
    'UnknownBorderError',
    'YearlyAverage',
    'border_key',
    # Filters
    'parse_month',
    'resolve_border',
    'select_border',
    'select_personal_travel',
    # Aggregates
    'annual_totals',
    'monthly_totals',
    'period_start',
    'period_summaries',
    'summarize_periods',
    'yearly_averages',
    # Pipeline
    'analyze',
    'analyze_borders',
    'monthly_frame',
    'period_table',
    'yearly_frame',
]
