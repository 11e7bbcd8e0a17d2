from datetime import date

import pandas as pd
import pytest

from bordercross.analysis.pipeline import (
    analyze,
    analyze_borders,
    monthly_frame,
    period_table,
    yearly_frame,
)
from bordercross.analysis.records import (
    Border,
    BorderAnalysis,
    MonthlyPoint,
    PeriodSummary,
)
from tests.conftest import obs


class TestAnalyze:
    def test_bundle_for_one_border(self, sample_rows):
        result = analyze(sample_rows, Border.MEXICO)

        assert result.border == "US-Mexico Border"
        assert result.monthly == (
            MonthlyPoint(month=date(1996, 1, 1), total=1.5, crossings=1_500_000),
            MonthlyPoint(month=date(1996, 2, 1), total=2.0, crossings=2_000_000),
            MonthlyPoint(month=date(1997, 3, 1), total=0.25, crossings=250_000),
        )
        assert [(y.year, y.months) for y in result.yearly] == [(1996, 2), (1997, 1)]
        assert result.yearly[0].avg_monthly == pytest.approx(1.75)
        assert result.periods == ()

    def test_other_borders_leave_no_trace(self, sample_rows):
        result = analyze(sample_rows, "US-Canada")
        assert sum(p.crossings for p in result.monthly) == 40_000 + 3_000_000

    def test_malformed_date_does_not_abort(self):
        rows = [
            obs("US-Mexico Border", "Jan 2020", "Pedestrians", 100),
            obs("US-Mexico Border", "13 Foo 2020", "Pedestrians", 900),
            obs("US-Mexico Border", "Jan 2020", "Bus Passengers", 50),
        ]
        result = analyze(rows, "US-Mexico")
        assert [p.crossings for p in result.monthly] == [150]

    def test_unknown_border_yields_empty_sequences(self, sample_rows):
        result = analyze(sample_rows, "US-Nowhere")
        assert result == BorderAnalysis(border="US-Nowhere")
        assert result.is_empty
        assert result.yearly == () and result.periods == ()

    def test_complete_period(self, four_year_rows):
        result = analyze(four_year_rows, Border.MEXICO)
        (period,) = result.periods
        assert period.period_label == "1996-1999"
        assert period.total == pytest.approx(100.0)
        assert period.mean_annual == pytest.approx(25.0)
        assert (period.min_annual, period.max_annual) == (pytest.approx(10.0), pytest.approx(40.0))

    def test_only_2024_gives_no_period(self):
        rows = [obs("US-Canada Border", f"{m} 2024", "Pedestrians", 1) for m in ("Jan", "Feb")]
        assert analyze(rows, Border.CANADA).periods == ()

    def test_idempotent(self, sample_rows, four_year_rows):
        rows = sample_rows + four_year_rows
        assert analyze(rows, Border.MEXICO) == analyze(rows, Border.MEXICO)

    def test_does_not_mutate_input(self, sample_rows):
        before = list(sample_rows)
        analyze(sample_rows, Border.MEXICO)
        assert sample_rows == before


class TestAnalyzeBorders:
    def test_defaults_to_both_borders(self, sample_rows):
        results = analyze_borders(sample_rows)
        assert list(results) == ["US-Canada Border", "US-Mexico Border"]

    def test_matches_individual_calls(self, sample_rows):
        results = analyze_borders(sample_rows, ["US-Mexico"])
        assert results == {"US-Mexico": analyze(sample_rows, "US-Mexico")}

    def test_alternate_spellings_analyzed_once(self, sample_rows):
        results = analyze_borders(sample_rows, ["US-Mexico", "US-Mexico Border", Border.MEXICO])
        assert list(results) == ["US-Mexico"]


class TestFrames:
    def test_period_table_rounds_copy_only(self):
        summary = PeriodSummary(
            start=1996, end=1999,
            total=100.123456, mean_annual=25.030864,
            max_annual=40.555555, min_annual=10.001,
        )
        table = period_table([summary])

        assert list(table.columns) == ["Period", "Total", "Mean Annual", "Max Annual", "Min Annual"]
        assert table.loc[0, "Period"] == "1996-1999"
        assert table.loc[0, "Total"] == 100.12
        assert table.loc[0, "Max Annual"] == 40.56
        assert summary.total == 100.123456

    def test_period_table_full_precision(self):
        summary = PeriodSummary(1996, 1999, 1.23456, 0.30864, 0.5, 0.1)
        assert period_table([summary], decimals=None).loc[0, "Total"] == 1.23456

    def test_monthly_and_yearly_frames(self, sample_rows):
        result = analyze(sample_rows, Border.MEXICO)

        monthly = monthly_frame(result.monthly)
        assert pd.api.types.is_datetime64_any_dtype(monthly["Month"])
        assert monthly["Crossings"].tolist() == [1_500_000, 2_000_000, 250_000]

        yearly = yearly_frame(result.yearly)
        assert yearly["Year"].tolist() == [1996, 1997]
        assert yearly["Months"].tolist() == [2, 1]

    def test_empty_frames(self):
        assert monthly_frame(()).empty
        assert yearly_frame(()).empty
        assert period_table(()).empty
