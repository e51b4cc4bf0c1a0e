"""Batch scoring: one shared rank index, every creator scored against it."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from creatorpoints.models import CreatorScore
from creatorpoints.points import score_creator
from creatorpoints.rank_index import RankIndex, build_rank_index
from creatorpoints.rules import DEFAULT_RULES, ScoringRules

logger = logging.getLogger(__name__)


def month_window(today: date) -> tuple[date, date]:
    """Return ``[first of this month, first of next month)``."""
    start = today.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def rank_creators(scores: Sequence[CreatorScore]) -> list[CreatorScore]:
    """Order by balance, then diamonds, then username."""
    return sorted(scores, key=lambda s: (-s.balance, -s.total_diamonds, s.username))


def build_leaderboard(
    histories: Mapping[str, Sequence[Any]],
    today: date,
    window_start: date | None = None,
    window_end: date | None = None,
    adjustments: Mapping[str, int] | None = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> list[CreatorScore]:
    """Score every creator in *histories* and return them ranked."""
    adjustments = adjustments or {}
    index = build_rank_index(histories, rules.rank_bonuses)

    scores = [
        score_creator(
            username,
            rows,
            index,
            today,
            window_start=window_start,
            window_end=window_end,
            adjustment=adjustments.get(username, 0),
            rules=rules,
        )
        for username, rows in histories.items()
    ]
    ranked = rank_creators(scores)
    logger.info(
        "Leaderboard: %d creators; top balance=%d",
        len(ranked),
        ranked[0].balance if ranked else 0,
    )
    return ranked


def monthly_stats(
    username: str,
    records: Sequence[Any],
    today: date,
    rank_index: RankIndex,
    adjustments: Mapping[str, int] | None = None,
    rules: ScoringRules = DEFAULT_RULES,
) -> CreatorScore:
    """Incentive stats for the calendar month containing *today*."""
    start, end = month_window(today)
    return score_creator(
        username,
        records,
        rank_index,
        today,
        window_start=start,
        window_end=end,
        adjustment=(adjustments or {}).get(username, 0),
        rules=rules,
    )
