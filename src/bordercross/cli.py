"""
Border Crossing Unified Command-Line Interface

Exposes three subcommands:

    bordercross fetch   [--data-dir DIR] [--url URL] [--force]
    bordercross summary [--csv FILE | --data-dir DIR] [--border NAME ...]
    bordercross report  [--csv FILE | --data-dir DIR] [--output-dir DIR] [...]

The package must be installed (``pip install -e .``) for the ``bordercross``
entry point to be available.

Package Location: src/bordercross/cli.py
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import List, Optional, Sequence

from .analysis.records import Border, BorderCrossingError
from .config import DEFAULT_BORDERS, DEFAULT_OUTPUT_DIR, TABLE_DECIMALS

log = logging.getLogger(__name__)


# ===========================================================================
# Shared helpers
# ===========================================================================

def _die(message: str) -> None:
    """Print an error message and exit with status 1.

    Args:
        message: Human-readable error text.
    """
    print(f"\n❌  Error: {message}", file=sys.stderr)
    sys.exit(1)


def _resolve_borders(names: Optional[Sequence[str]]) -> List[Border]:
    """Map ``--border`` values to ``Border`` members, exiting on a typo.

    Args:
        names: Raw CLI values, or ``None`` for the defaults.

    Returns:
        List of borders, duplicates removed, order preserved.
    """
    from .analysis.filters import resolve_border

    if not names:
        return list(DEFAULT_BORDERS)
    borders: List[Border] = []
    for name in names:
        try:
            border = resolve_border(name)
        except BorderCrossingError as exc:
            _die(str(exc))
        if border not in borders:
            borders.append(border)
    return borders


def _load_rows(args: argparse.Namespace) -> list:
    """Read observations from ``--csv`` or the newest CSV in ``--data-dir``.

    Args:
        args: Parsed CLI arguments with ``csv`` and ``data_dir`` fields.

    Returns:
        List of ``Observation`` records.
    """
    from .config import resolve_data_dir
    from .data.reader import find_dataset_csv, read_observations

    try:
        if args.csv:
            csv_path = Path(args.csv)
        else:
            csv_path = find_dataset_csv(resolve_data_dir(args.data_dir))
        print(f"    Source: {csv_path}")
        rows = read_observations(csv_path)
    except (BorderCrossingError, OSError) as exc:
        if args.verbose:
            traceback.print_exc()
        _die(str(exc))
    print(f"    Rows:   {len(rows):,}")
    return rows


# ===========================================================================
# Subcommand handlers
# ===========================================================================

# ---------------------------------------------------------------------------
# fetch
# ---------------------------------------------------------------------------

def handle_fetch(args: argparse.Namespace) -> None:
    """Download the dataset (extracting it if it arrives as a zip).

    Args:
        args: Parsed CLI arguments.
    """
    import requests

    from .config import resolve_data_dir, resolve_data_url
    from .data.download import fetch_dataset

    url = resolve_data_url(args.url)
    data_dir = resolve_data_dir(args.data_dir)

    print(f"\n🌐  Fetching border crossing dataset")
    print(f"    URL:  {url}")
    print(f"    Into: {data_dir}")

    try:
        csv_path = fetch_dataset(url, data_dir, force=args.force, timeout=args.timeout)
    except (requests.RequestException, OSError, ValueError) as exc:
        if args.verbose:
            traceback.print_exc()
        _die(f"Download failed: {exc}")

    print(f"\n✅  Dataset ready: {csv_path}")


# ---------------------------------------------------------------------------
# summary
# ---------------------------------------------------------------------------

def handle_summary(args: argparse.Namespace) -> None:
    """Print yearly averages and 4-year period tables per border.

    Args:
        args: Parsed CLI arguments.
    """
    from .analysis.pipeline import analyze_borders, period_table, yearly_frame

    borders = _resolve_borders(args.border)
    print(f"\n📊  Border crossing summary")
    rows = _load_rows(args)

    analyses = analyze_borders(rows, borders)
    for label, analysis in analyses.items():
        print(f"\n=== {label} ===")
        if analysis.is_empty:
            print("    (no personal-travel data)")
            continue

        first, last = analysis.monthly[0].month, analysis.monthly[-1].month
        print(
            f"    {len(analysis.monthly)} months "
            f"({first:%b %Y} – {last:%b %Y}), values in millions"
        )

        print("\n  Average monthly crossings by year")
        print(
            yearly_frame(analysis.yearly)
            .round(TABLE_DECIMALS)
            .to_string(index=False)
        )

        print("\n  4-year periods (complete windows only)")
        table = period_table(analysis.periods, decimals=TABLE_DECIMALS)
        if table.empty:
            print("    (no complete 4-year periods)")
        else:
            print(table.to_string(index=False))


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------

def handle_report(args: argparse.Namespace) -> None:
    """Write charts and the period table for the requested borders.

    Args:
        args: Parsed CLI arguments.
    """
    from .reports.generators import ReportGenerator

    borders = _resolve_borders(args.border)
    output_dir = Path(args.output_dir)

    print(f"\n🖼️   Generating border crossing reports")
    print(f"    Output: {output_dir}")
    print(f"    Borders: {', '.join(b.short_name.upper() for b in borders)}")
    rows = _load_rows(args)

    gen = ReportGenerator(rows, output_dir)
    written = gen.generate(borders)

    for path in written:
        print(f"      ✅  {path.name}")

    expected = 2 * len(borders) + 2
    print(f"\n✅  Done.  {len(written)}/{expected} files written to {output_dir}")
    if len(written) < expected:
        sys.exit(1)


# ===========================================================================
# Argument parser construction
# ===========================================================================

def _add_source_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--csv",
        default=None,
        metavar="FILE",
        help="Explicit path to the Border Crossing Entry Data CSV.",
    )
    group.add_argument(
        "--data-dir",
        default=None,
        metavar="DIR",
        help=(
            "Directory holding a 'Border_Crossing*.csv' file "
            "(default: $BORDERCROSS_DATA_DIR or data/raw)."
        ),
    )
    parser.add_argument(
        "--border",
        nargs="+",
        default=None,
        metavar="NAME",
        help="Borders to analyze, e.g. 'US-Canada' 'US-Mexico' (default: both).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct and return the top-level argument parser.

    Returns:
        Configured ``ArgumentParser`` with ``fetch``, ``summary``, and
        ``report`` subcommands attached.
    """
    parser = argparse.ArgumentParser(
        prog="bordercross",
        description=(
            "Border Crossing Analysis\n"
            "Personal-travel crossing statistics for US land borders."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING).",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=False,
        help="Emit log records as single-line JSON.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print full tracebacks for failures.",
    )
    subs = parser.add_subparsers(dest="command", metavar="<command>")
    subs.required = True

    # ------------------------------------------------------------------
    # fetch
    # ------------------------------------------------------------------
    p_fetch = subs.add_parser(
        "fetch",
        help="Download the Border Crossing Entry Data CSV.",
    )
    p_fetch.add_argument(
        "--data-dir",
        default=None,
        metavar="DIR",
        help="Target directory (default: $BORDERCROSS_DATA_DIR or data/raw).",
    )
    p_fetch.add_argument(
        "--url",
        default=None,
        metavar="URL",
        help="Dataset or zip archive URL (default: $BORDERCROSS_DATA_URL or BTS export).",
    )
    p_fetch.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Re-download even if a dataset CSV already exists.",
    )
    p_fetch.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        metavar="SECONDS",
        help="Per-request timeout in seconds (default: 60).",
    )
    p_fetch.set_defaults(func=handle_fetch)

    # ------------------------------------------------------------------
    # summary
    # ------------------------------------------------------------------
    p_sum = subs.add_parser(
        "summary",
        help="Print yearly averages and 4-year period tables.",
    )
    _add_source_args(p_sum)
    p_sum.set_defaults(func=handle_summary)

    # ------------------------------------------------------------------
    # report
    # ------------------------------------------------------------------
    p_rep = subs.add_parser(
        "report",
        help="Write HTML charts and the period summary CSV.",
        description=(
            "Analyze each border once and write:\n"
            "  <border>_monthly.html, <border>_periods.html,\n"
            "  yearly_comparison.html, period_summary.csv"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_source_args(p_rep)
    p_rep.add_argument(
        "--output-dir",
        default=str(DEFAULT_OUTPUT_DIR),
        metavar="DIR",
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    p_rep.set_defaults(func=handle_report)

    return parser


# ===========================================================================
# Entry point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate handler.

    This function is registered as the ``bordercross`` console script entry
    point in ``pyproject.toml``.
    """
    from .utils.logging import configure_logging

    parser = _build_parser()
    args   = parser.parse_args(argv)
    configure_logging(getattr(logging, args.log_level), json_format=args.log_json)
    args.func(args)


if __name__ == "__main__":
    main()
