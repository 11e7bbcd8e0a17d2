"""
Border Crossing Charts (Functional Core)

Pure functions – no file I/O, no side effects.
Input: ``BorderAnalysis`` results from ``analysis.pipeline.analyze``.
Output: plotly.graph_objects.Figure.

Package Location: src/bordercross/plotting/series.py

Missing months are not plotted as zero: the monthly line is drawn from the
points that exist, and a gap of more than one month breaks the line so
absent data is not visually interpolated.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

import pandas as pd
import plotly.graph_objects as go

from ..analysis.pipeline import monthly_frame, yearly_frame
from ..analysis.records import Border, BorderAnalysis, border_key

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BORDER_COLORS: Dict[str, str] = {
    Border.CANADA.short_name: "#d62728",   # red
    Border.MEXICO.short_name: "#2ca02c",   # green
}
_FALLBACK_COLOR = "#1f77b4"

_UNITS_LABEL = "Crossings (millions)"
_LINE_WIDTH = 2

_BASE_LAYOUT = dict(
    template="plotly_white",
    hovermode="x unified",
    legend=dict(
        orientation="h",
        yanchor="bottom",
        y=1.02,
        xanchor="right",
        x=1,
    ),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def plot_monthly(analysis: BorderAnalysis) -> go.Figure:
    """
    Monthly personal-travel crossings for one border.

    Args:
        analysis: Result of ``analyze`` for a single border.

    Returns:
        Line chart of ``MonthlyPoint.total`` against month.  An empty
        analysis yields a figure with no traces and a "no data" annotation.
    """
    fig = go.Figure()
    title = _build_title(analysis.border, "Monthly Personal Travel Crossings")

    if analysis.is_empty:
        _annotate_empty(fig)
    else:
        df = _with_month_gaps(monthly_frame(analysis.monthly))
        fig.add_trace(go.Scatter(
            x=df["Month"],
            y=df["Total"],
            mode="lines",
            connectgaps=False,
            name=_short_label(analysis.border),
            line=dict(color=_color_for(analysis.border), width=_LINE_WIDTH),
            hovertemplate="%{x|%b %Y}: %{y:.2f}M<extra></extra>",
        ))

    fig.update_layout(
        title=title,
        xaxis=dict(title="Month", type="date"),
        yaxis=dict(title=_UNITS_LABEL, rangemode="tozero"),
        showlegend=False,
        **_BASE_LAYOUT,
    )
    return fig


def plot_yearly_comparison(analyses: Mapping[str, BorderAnalysis]) -> go.Figure:
    """
    Average monthly crossings per year, one line per border.

    This is the only place the borders meet: each analysis is computed
    independently and joined here for display.

    Args:
        analyses: ``{border_label: BorderAnalysis}`` as returned by
            ``analyze_borders``.

    Returns:
        Multi-line chart of ``YearlyAverage.avg_monthly`` against year.
    """
    fig = go.Figure()
    plotted = 0

    for label, analysis in analyses.items():
        if not analysis.yearly:
            continue
        df = yearly_frame(analysis.yearly)
        fig.add_trace(go.Scatter(
            x=df["Year"],
            y=df["Average Monthly"],
            mode="lines+markers",
            name=_short_label(label),
            line=dict(color=_color_for(label), width=_LINE_WIDTH),
            customdata=df["Months"],
            hovertemplate=(
                f"<b>{_short_label(label)}</b><br>"
                "Year: %{x}<br>"
                "Avg / month: %{y:.2f}M<br>"
                "Months observed: %{customdata}<extra></extra>"
            ),
        ))
        plotted += 1

    if not plotted:
        _annotate_empty(fig)

    fig.update_layout(
        title="Average Monthly Personal Travel Crossings by Year",
        xaxis=dict(title="Year", dtick=2),
        yaxis=dict(title=_UNITS_LABEL, rangemode="tozero"),
        showlegend=True,
        **_BASE_LAYOUT,
    )
    return fig


def plot_periods(analysis: BorderAnalysis) -> go.Figure:
    """
    4-year period totals for one border, with annual min/max markers.

    Only complete windows appear; the trailing partial window is absent by
    construction of ``period_summaries``.

    Args:
        analysis: Result of ``analyze`` for a single border.

    Returns:
        Bar chart of ``PeriodSummary.total`` per window, overlaid with the
        per-window maximum and minimum annual totals.
    """
    fig = go.Figure()
    title = _build_title(analysis.border, "Personal Travel Crossings by 4-Year Period")

    if not analysis.periods:
        _annotate_empty(fig, "No complete 4-year periods")
    else:
        labels: List[str] = [p.period_label for p in analysis.periods]
        fig.add_trace(go.Bar(
            x=labels,
            y=[p.total for p in analysis.periods],
            name="Period total",
            marker=dict(color=_color_for(analysis.border)),
            customdata=[p.mean_annual for p in analysis.periods],
            hovertemplate=(
                "%{x}<br>Total: %{y:.2f}M<br>"
                "Mean annual: %{customdata:.2f}M<extra></extra>"
            ),
        ))
        for name, values, symbol in (
            ("Max annual", [p.max_annual for p in analysis.periods], "triangle-up"),
            ("Min annual", [p.min_annual for p in analysis.periods], "triangle-down"),
        ):
            fig.add_trace(go.Scatter(
                x=labels,
                y=values,
                mode="markers",
                name=name,
                marker=dict(symbol=symbol, size=10, color="black"),
                hovertemplate=f"%{{x}}<br>{name}: %{{y:.2f}}M<extra></extra>",
            ))

    fig.update_layout(
        title=title,
        xaxis=dict(title="Period", type="category"),
        yaxis=dict(title=_UNITS_LABEL, rangemode="tozero"),
        showlegend=True,
        **_BASE_LAYOUT,
    )
    return fig


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _build_title(border: str, suffix: str) -> str:
    return f"{_short_label(border)} – {suffix}"


def _short_label(border: str) -> str:
    """``'US-Canada Border'`` -> ``'US-Canada'``; unknown labels unchanged."""
    text = str(border).strip()
    return text[: -len(" Border")] if text.endswith(" Border") else text


def _color_for(border: str) -> str:
    return _BORDER_COLORS.get(border_key(border), _FALLBACK_COLOR)


def _annotate_empty(fig: go.Figure, text: Optional[str] = None) -> None:
    fig.add_annotation(
        text=text or "No data",
        xref="paper", yref="paper",
        x=0.5, y=0.5,
        showarrow=False,
        font=dict(size=16, color="gray"),
    )


def _with_month_gaps(df: pd.DataFrame) -> pd.DataFrame:
    """
    Insert a NaN row after any month that is not followed by the next
    calendar month, so ``connectgaps=False`` breaks the line there.

    Args:
        df: Output of ``monthly_frame`` (sorted by ``Month``).

    Returns:
        Copy of *df* with gap rows inserted (``Total`` is NaN on those rows).
    """
    if len(df) < 2:
        return df

    ordinal = df["Month"].dt.year * 12 + df["Month"].dt.month
    gap_after = df.loc[ordinal.diff().shift(-1) > 1, "Month"]
    if gap_after.empty:
        return df

    fillers = pd.DataFrame({
        "Month": gap_after + pd.offsets.MonthBegin(1),
        "Total": float("nan"),
    })
    return (
        pd.concat([df[["Month", "Total"]], fillers], ignore_index=True)
        .sort_values("Month")
        .reset_index(drop=True)
    )
