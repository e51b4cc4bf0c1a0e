"""Turn raw history rows into validated, de-duplicated DailyRecords.

All of the "missing or junk field means 0" coercion lives here so the
scoring code can assume fully-populated records.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from creatorpoints.models import DailyRecord

logger = logging.getLogger(__name__)

# Accepted spellings for each field, first match wins.
_DIAMOND_KEYS = ("daily", "diamondsEarned", "diamonds_earned")
_HOUR_KEYS = ("hours", "hoursLive", "hours_live")


def parse_day(value: Any) -> date | None:
    """Return the UTC calendar day for *value*, or ``None`` if it isn't one.

    Timezone-aware datetimes and ISO strings with an offset are converted to
    UTC first; naive values are taken as UTC already.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if len(text) > 10:
        try:
            return parse_day(datetime.fromisoformat(text))
        except ValueError:
            pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def to_number(value: Any) -> float:
    """Coerce *value* to a non-negative finite float; anything else is 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        try:
            num = float(value.strip().replace(",", ""))
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(num) or math.isinf(num) or num < 0:
        return 0.0
    return num


def _first(row: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in row:
            return row[key]
    return None


def to_record(row: Any) -> DailyRecord | None:
    """Normalise a single row; ``None`` when it has no usable date."""
    if isinstance(row, DailyRecord):
        # Records built directly skip the coercion below, so redo it.
        return DailyRecord(
            date=row.date,
            diamonds_earned=to_number(row.diamonds_earned),
            hours_live=to_number(row.hours_live),
        )
    if not isinstance(row, Mapping):
        return None
    day = parse_day(row.get("date"))
    if day is None:
        return None
    return DailyRecord(
        date=day,
        diamonds_earned=to_number(_first(row, _DIAMOND_KEYS)),
        hours_live=to_number(_first(row, _HOUR_KEYS)),
    )


def normalize_records(rows: Iterable[Any] | None) -> list[DailyRecord]:
    """Normalise *rows* into one record per date, sorted ascending.

    Later rows overwrite earlier rows for the same date, matching how a
    re-import replaces a calendar day.
    """
    by_day: dict[date, DailyRecord] = {}
    dropped = 0
    for row in rows or []:
        record = to_record(row)
        if record is None:
            dropped += 1
            continue
        by_day[record.date] = record

    if dropped:
        logger.debug("Dropped %d history rows without a usable date", dropped)
    return [by_day[d] for d in sorted(by_day)]


def filter_window(
    records: Iterable[DailyRecord],
    start: date | None = None,
    end: date | None = None,
) -> list[DailyRecord]:
    """Keep records with ``start <= date < end``; either bound may be open."""
    return [
        r
        for r in records
        if (start is None or r.date >= start) and (end is None or r.date < end)
    ]
