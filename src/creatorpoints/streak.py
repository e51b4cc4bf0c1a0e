"""Valid go-live streaks: consecutive days with at least an hour live."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from creatorpoints.models import DailyRecord
from creatorpoints.rules import DEFAULT_RULES, ScoringRules


def _gap_days(later: date, earlier: date) -> float:
    return float((later - earlier).days)


def compute_streak(
    records: Iterable[DailyRecord],
    today: date,
    rules: ScoringRules = DEFAULT_RULES,
) -> int:
    """Return the current streak length as of *today*.

    A record dated *today* with less than a valid day's hours is a
    "not live yet" placeholder and is ignored. The streak is 0 when the
    latest counted day is more than ``streak_max_gap_days`` before *today*.
    """
    entries = sorted((r for r in records if r.date <= today), key=lambda r: r.date)

    if entries and entries[-1].date == today and entries[-1].hours_live < rules.valid_day_hours:
        entries = entries[:-1]

    if not entries:
        return 0
    latest = entries[-1]
    if latest.hours_live < rules.valid_day_hours:
        return 0
    if _gap_days(today, latest.date) > rules.streak_max_gap_days:
        return 0

    streak = 1
    last_date = latest.date
    for entry in reversed(entries[:-1]):
        gap = _gap_days(last_date, entry.date)
        if (
            rules.streak_min_gap_days <= gap <= rules.streak_max_gap_days
            and entry.hours_live >= rules.valid_day_hours
        ):
            streak += 1
            last_date = entry.date
        else:
            break
    return streak


def streak_bonus(days: int, rules: ScoringRules = DEFAULT_RULES) -> int:
    """Map a streak length to its one-off bonus."""
    for min_days, points in rules.streak_bonuses:
        if days >= min_days:
            return points
    return 0
