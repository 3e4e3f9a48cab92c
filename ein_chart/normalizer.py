"""Stage 2 — Type, window, order, and deduplicate raw rows."""

import datetime
import logging
import math
import re

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta

from ein_chart.config import (
    DATE_COLUMN,
    ESTIMATE_COLUMN,
    HIGH_COLUMN,
    LOW_COLUMN,
    MONTH_NAMES,
    WINDOW_MONTHS,
)
from ein_chart.models import ObservationRecord

_LOGGER = logging.getLogger(__name__)

_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_date(text: str) -> datetime.date | None:
    """
    Parse a permissive textual date, reading ambiguous forms as month/day/year.

    Missing components default to January / the 1st of the current year.
    Returns ``None`` when *text* cannot be read as a date.
    """
    default = datetime.datetime(datetime.date.today().year, 1, 1)
    try:
        return dateutil_parser.parse(text, dayfirst=False, default=default).date()
    except (ValueError, OverflowError):
        return None


def parse_number(text: str | None) -> float:
    """
    Read the leading decimal number of *text*; ``0.0`` if there is none.

    ``"45 days"`` gives ``45.0`` and ``"5,000"`` gives ``5.0``.
    """
    if not text:
        return 0.0
    match = _LEADING_NUMBER_RE.match(text)
    if not match:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value):
        return 0.0
    return value


def window_floor(latest: datetime.date) -> datetime.date:
    """First day of the month ``WINDOW_MONTHS`` before *latest*."""
    return (latest - relativedelta(months=WINDOW_MONTHS)).replace(day=1)


def deduplicate(records: list[ObservationRecord]) -> list[ObservationRecord]:
    """Keep the first record seen for each calendar day."""
    seen: set[datetime.date] = set()
    unique: list[ObservationRecord] = []
    for record in records:
        if record.date in seen:
            continue
        seen.add(record.date)
        unique.append(record)
    return unique


def build_labels(series: list[ObservationRecord]) -> list[str]:
    """
    One x-axis label per record.

    The month abbreviation appears on the first record of each (month, year)
    and every later record in that month gets ``""``.
    """
    seen: set[tuple[int, int]] = set()
    labels: list[str] = []
    for record in series:
        key = (record.date.month, record.date.year)
        if key in seen:
            labels.append("")
        else:
            seen.add(key)
            labels.append(MONTH_NAMES[record.date.month - 1])
    return labels


def _to_record(row: dict[str, str]) -> ObservationRecord | None:
    day = parse_date(row[DATE_COLUMN])
    if day is None:
        return None
    return ObservationRecord(
        date=day,
        estimate=parse_number(row.get(ESTIMATE_COLUMN)),
        low=parse_number(row.get(LOW_COLUMN)),
        high=parse_number(row.get(HIGH_COLUMN)),
    )


def normalize(
    rows: list[dict[str, str]],
) -> tuple[list[ObservationRecord], list[str]]:
    """
    Full normalisation pipeline:

    1. Drop rows without a date or estimate; type the rest.
    2. Drop rows whose date cannot be parsed.
    3. Drop records before the retention window (see ``window_floor``).
    4. Sort ascending by date (stable, so input order breaks ties).
    5. Deduplicate by calendar day.
    6. Build the collapsed month labels.

    Returns ``(series, labels)``; both are empty when nothing survives.
    """
    records: list[ObservationRecord] = []
    invalid = 0
    for row in rows:
        if not row.get(DATE_COLUMN) or not row.get(ESTIMATE_COLUMN):
            continue
        record = _to_record(row)
        if record is None:
            invalid += 1
            continue
        records.append(record)

    if invalid:
        _LOGGER.debug("Dropped %d rows with unparsable dates", invalid)
    if not records:
        return [], []

    floor = window_floor(max(r.date for r in records))
    windowed = [r for r in records if r.date >= floor]
    windowed.sort(key=lambda r: r.date)

    series = deduplicate(windowed)
    _LOGGER.debug(
        "Normalised %d rows to %d records (window starts %s)",
        len(rows), len(series), floor.isoformat(),
    )
    return series, build_labels(series)


def to_rows(series: list[ObservationRecord]) -> list[dict[str, str]]:
    """Render records back into raw row dicts that ``normalize`` accepts."""
    return [
        {
            DATE_COLUMN: f"{r.date.month}/{r.date.day}/{r.date.year}",
            ESTIMATE_COLUMN: repr(r.estimate),
            LOW_COLUMN: repr(r.low),
            HIGH_COLUMN: repr(r.high),
        }
        for r in series
    ]
