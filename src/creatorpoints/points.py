"""Incentive points: per-day scoring folded with rank and streak bonuses."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import date
from typing import Any

from creatorpoints.models import CreatorScore, DailyRecord, PointsBreakdown
from creatorpoints.normalize import filter_window, normalize_records
from creatorpoints.rank_index import RankIndex
from creatorpoints.rules import DEFAULT_RULES, ScoringRules
from creatorpoints.streak import compute_streak, streak_bonus

logger = logging.getLogger(__name__)


def diamond_points(diamonds: float, rules: ScoringRules = DEFAULT_RULES) -> int:
    """Flat reward for the first threshold, plus a step for each extra full step."""
    if diamonds < rules.diamond_threshold:
        return 0
    extra = math.floor((diamonds - rules.diamond_threshold) / rules.diamond_step)
    return rules.diamond_base_points + extra * rules.diamond_step_points


def hour_points(hours: float, rules: ScoringRules = DEFAULT_RULES) -> int:
    return math.floor(hours) * rules.hour_points


def valid_day_points(hours: float, rules: ScoringRules = DEFAULT_RULES) -> int:
    return rules.valid_day_points if hours >= rules.valid_day_hours else 0


def _windowed(
    records: Iterable[Any],
    window_start: date | None,
    window_end: date | None,
) -> list[DailyRecord]:
    return filter_window(normalize_records(records), window_start, window_end)


def score(
    username: str,
    records: Iterable[Any],
    rank_index: RankIndex,
    today: date,
    window_start: date | None = None,
    window_end: date | None = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> PointsBreakdown:
    """Score one creator's history into a :class:`PointsBreakdown`.

    *records* may be raw ``{date, daily, hours}`` rows or DailyRecords; they
    are normalised first. Only days in ``[window_start, window_end)`` count,
    and the streak bonus uses the same window.
    """
    entries = _windowed(records, window_start, window_end)
    return _score_entries(username, entries, rank_index, today, rules)[0]


def _score_entries(
    username: str,
    entries: list[DailyRecord],
    rank_index: RankIndex,
    today: date,
    rules: ScoringRules,
) -> tuple[PointsBreakdown, int]:
    breakdown = PointsBreakdown()
    if not entries:
        return breakdown, 0

    for e in entries:
        breakdown.diamond_points += diamond_points(e.diamonds_earned, rules)
        breakdown.hour_points += hour_points(e.hours_live, rules)
        breakdown.valid_day_points += valid_day_points(e.hours_live, rules)
        breakdown.rank_bonus_points += rank_index.bonus_for(e.date, username)

    streak_days = compute_streak(entries, today, rules)
    breakdown.streak_bonus_points = streak_bonus(streak_days, rules)

    breakdown.total = (
        breakdown.diamond_points
        + breakdown.hour_points
        + breakdown.valid_day_points
        + breakdown.rank_bonus_points
        + breakdown.streak_bonus_points
    )
    return breakdown, streak_days


def score_creator(
    username: str,
    records: Iterable[Any],
    rank_index: RankIndex,
    today: date,
    window_start: date | None = None,
    window_end: date | None = None,
    adjustment: int = 0,
    rules: ScoringRules = DEFAULT_RULES,
) -> CreatorScore:
    """Like :func:`score` but with streak length, raw totals and the balance."""
    entries = _windowed(records, window_start, window_end)
    breakdown, streak_days = _score_entries(username, entries, rank_index, today, rules)

    result = CreatorScore(
        username=username,
        breakdown=breakdown,
        streak_days=streak_days,
        total_diamonds=sum(e.diamonds_earned for e in entries),
        total_hours=round(sum(e.hours_live for e in entries), 1),
        valid_days=sum(1 for e in entries if e.hours_live >= rules.valid_day_hours),
        adjustment_points=adjustment,
        balance=breakdown.total + adjustment,
    )
    logger.debug(
        "Scored %s: total=%d streak=%d balance=%d",
        username,
        breakdown.total,
        streak_days,
        result.balance,
    )
    return result
