"""
Row Selection (Functional Core)

Border selection with month normalisation, and the personal-travel measure
filter.  Pure functions over lists of records; the only side effect is a
warning log line for each row dropped because of an unparseable date.

Package Location: src/bordercross/analysis/filters.py
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, List, Union

from .records import (
    PERSONAL_TRAVEL_MEASURES,
    Border,
    DatedObservation,
    MalformedDateError,
    Observation,
    UnknownBorderError,
    border_key,
)

log = logging.getLogger(__name__)

_MONTH_FORMAT = "%b %Y"  # e.g. "Jan 2024"


def parse_month(text: str) -> date:
    """Parse a ``'<Mon> <YYYY>'`` string to the first day of that month.

    Args:
        text: Date label from the source dataset, e.g. ``'Mar 2019'``.

    Returns:
        ``datetime.date`` with ``day == 1``.

    Raises:
        MalformedDateError: If *text* is not a 3-letter month abbreviation
            followed by a 4-digit year.
    """
    try:
        parsed = datetime.strptime(str(text).strip(), _MONTH_FORMAT)
    except ValueError as exc:
        raise MalformedDateError(
            f"Unparseable date {text!r}; expected '<Mon> <YYYY>'"
        ) from exc
    return parsed.date().replace(day=1)


def resolve_border(name: Union[str, Border]) -> Border:
    """Strict lookup of a border name, accepting short forms.

    Args:
        name: ``Border`` member, dataset label (``'US-Canada Border'``) or
            short form (``'US-Canada'``, case-insensitive).

    Returns:
        The matching ``Border``.

    Raises:
        UnknownBorderError: If *name* matches no known border.
    """
    if isinstance(name, Border):
        return name
    key = border_key(name)
    for border in Border:
        if border.short_name == key:
            return border
    known = ", ".join(b.value for b in Border)
    raise UnknownBorderError(f"Unknown border {name!r}. Known borders: {known}")


def select_border(
    rows: Iterable[Observation],
    border: Union[str, Border],
) -> List[DatedObservation]:
    """Keep rows for *border* and normalise their dates to month keys.

    Rows whose date fails ``parse_month`` are logged and dropped; the rest
    of the input is still processed.

    Args:
        rows: Raw observations, in any order.
        border: Target border (label, short form or ``Border``).

    Returns:
        List of ``DatedObservation`` in input order.
    """
    label = border.value if isinstance(border, Border) else str(border)
    target = border_key(label)
    selected: List[DatedObservation] = []
    dropped = 0

    for row in rows:
        if border_key(row.border) != target:
            continue
        try:
            month = parse_month(row.date)
        except MalformedDateError as exc:
            dropped += 1
            log.warning(
                "Dropping row with malformed date: %s", exc,
                extra={"border": row.border, "date": row.date, "measure": row.measure},
            )
            continue
        selected.append(
            DatedObservation(
                border=row.border,
                month=month,
                measure=row.measure,
                value=row.value,
            )
        )

    if dropped:
        log.info("Dropped %d malformed row(s) for %s", dropped, label)
    return selected


def select_personal_travel(rows: Iterable[DatedObservation]) -> List[DatedObservation]:
    """Keep only rows whose measure is a personal-travel mode."""
    return [r for r in rows if r.measure in PERSONAL_TRAVEL_MEASURES]
