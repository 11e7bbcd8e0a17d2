"""
Border Crossing Report Generator (Imperative Shell)

Thin orchestration layer: runs ``analyze`` once per border, calls the
plotting functions to build figures, and writes HTML/CSV artifacts.

No aggregation logic lives here.  All computation goes through
src/bordercross/analysis/pipeline.py.

Package Location: src/bordercross/reports/generators.py

Usage::

    from pathlib import Path
    from bordercross.data import load_observations
    from bordercross.reports.generators import ReportGenerator

    rows = load_observations(data_dir=Path("data/raw"))
    gen = ReportGenerator(rows, output_dir=Path("outputs"))
    gen.generate()
    # Writes:
    #   outputs/us-canada_monthly.html
    #   outputs/us-canada_periods.html
    #   outputs/us-mexico_monthly.html
    #   outputs/us-mexico_periods.html
    #   outputs/yearly_comparison.html
    #   outputs/period_summary.csv
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd
import plotly.graph_objects as go

from ..analysis.pipeline import analyze_borders, period_table
from ..analysis.records import Border, BorderAnalysis, Observation
from ..config import DEFAULT_BORDERS, TABLE_DECIMALS
from ..plotting.series import plot_monthly, plot_periods, plot_yearly_comparison

log = logging.getLogger(__name__)


class ReportGenerator:
    """
    Generates and saves the standard border crossing charts and tables.

    Responsibilities
    ----------------
    - Analyze each requested border exactly once.
    - Call pure plotting functions from the functional core.
    - Write the resulting Plotly figures to HTML and the period table to CSV.

    Args:
        observations: Raw rows, as returned by ``data.load_observations``.
        output_dir: Directory for report output (created if needed).
        decimals: Presentation rounding for the period table.
    """

    def __init__(
        self,
        observations: Sequence[Observation],
        output_dir: Path,
        decimals: int = TABLE_DECIMALS,
    ) -> None:
        self.observations = observations
        self.output_dir = Path(output_dir)
        self.decimals = decimals

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def analyze(
        self,
        borders: Optional[Iterable[Union[str, Border]]] = None,
    ) -> Dict[str, BorderAnalysis]:
        """Run the pipeline once per border over this generator's rows."""
        return analyze_borders(self.observations, borders or DEFAULT_BORDERS)

    def generate(
        self,
        borders: Optional[Iterable[Union[str, Border]]] = None,
    ) -> List[Path]:
        """
        Write all charts and tables for *borders*.

        Errors in individual artifacts are logged so that a failure in one
        does not prevent the others from being saved.

        Args:
            borders: Borders to include.  Defaults to ``DEFAULT_BORDERS``.

        Returns:
            Paths of the files written, in write order.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        analyses = self.analyze(borders)
        written: List[Path] = []

        for label, analysis in analyses.items():
            slug = _slugify(label)
            self._write(written, f"{slug}_monthly.html", lambda a=analysis: plot_monthly(a))
            self._write(written, f"{slug}_periods.html", lambda a=analysis: plot_periods(a))

        self._write(
            written, "yearly_comparison.html",
            lambda: plot_yearly_comparison(analyses),
        )
        self._write(
            written, "period_summary.csv",
            lambda: summary_table(analyses, decimals=self.decimals),
        )

        log.info(
            "Wrote %d report file(s) to %s", len(written), self.output_dir,
            extra={"output_dir": str(self.output_dir), "files": len(written)},
        )
        return written

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _write(
        self,
        written: List[Path],
        filename: str,
        build: Callable[[], Union[go.Figure, pd.DataFrame]],
    ) -> None:
        """
        Build one artifact and save it under ``output_dir``.

        Figures are written with ``write_html``; DataFrames with ``to_csv``.
        """
        out_path = self.output_dir / filename
        try:
            artifact = build()
            if isinstance(artifact, pd.DataFrame):
                artifact.to_csv(out_path, index=False)
            else:
                artifact.write_html(str(out_path), include_plotlyjs="cdn")
        except Exception:
            log.exception("Failed to write %s", filename, extra={"artifact": filename})
            return
        written.append(out_path)
        log.debug("Saved %s", out_path)


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

def summary_table(
    analyses: Dict[str, BorderAnalysis],
    decimals: Optional[int] = TABLE_DECIMALS,
) -> pd.DataFrame:
    """
    Stack the period tables of several borders into one display table.

    Args:
        analyses: ``{border_label: BorderAnalysis}``.
        decimals: Presentation rounding, or ``None`` for full precision.

    Returns:
        DataFrame with a leading ``Border`` column followed by the
        ``period_table`` columns.  Borders without complete periods
        contribute no rows.
    """
    frames = []
    for label, analysis in analyses.items():
        table = period_table(analysis.periods, decimals=decimals)
        table.insert(0, "Border", label)
        frames.append(table)
    if not frames:
        return pd.DataFrame(columns=["Border", *period_table(()).columns])
    return pd.concat(frames, ignore_index=True)


def _slugify(label: str) -> str:
    """``'US-Canada Border'`` -> ``'us-canada'``."""
    text = str(label).strip()
    if text.lower().endswith(" border"):
        text = text[: -len(" border")]
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-") or "border"


# ---------------------------------------------------------------------------
# Convenience entry-point
# ---------------------------------------------------------------------------

def generate_reports(
    observations: Sequence[Observation],
    output_dir: Path,
    borders: Optional[Iterable[Union[str, Border]]] = None,
) -> List[Path]:
    """
    Convenience function: create a ``ReportGenerator`` and run it once.

    Args:
        observations: Raw rows.
        output_dir: Output directory.
        borders: Borders to include.  Defaults to ``DEFAULT_BORDERS``.

    Example::

        from pathlib import Path
        from bordercross.data import load_observations
        from bordercross.reports.generators import generate_reports

        rows = load_observations(csv_path=Path("Border_Crossing_Entry_Data.csv"))
        generate_reports(rows, Path("outputs"))
    """
    return ReportGenerator(observations, output_dir).generate(borders)
