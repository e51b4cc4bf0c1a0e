"""Daily Top-K placement bonuses by diamonds earned."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from creatorpoints.normalize import normalize_records

logger = logging.getLogger(__name__)


class RankIndex:
    """Read-only ``date -> {username: bonus}`` lookup built once per batch."""

    def __init__(self, by_day: dict[date, dict[str, int]]) -> None:
        self._by_day = by_day

    def bonus_for(self, day: date, username: str) -> int:
        return self._by_day.get(day, {}).get(username, 0)

    def placements(self, day: date) -> dict[str, int]:
        """Return a copy of the ranked creators and their bonus for *day*."""
        return dict(self._by_day.get(day, {}))

    def days(self) -> list[date]:
        return sorted(self._by_day)

    def __len__(self) -> int:
        return len(self._by_day)


def build_rank_index(
    histories: Mapping[str, Sequence[Any]],
    bonus_table: Sequence[int],
    top_k: int | None = None,
) -> RankIndex:
    """Rank creators per day by diamonds and award ``bonus_table[rank]``.

    Only creators with positive diamonds on a day are ranked. Equal diamonds
    are ordered by username so the result does not depend on input order.
    """
    k = len(bonus_table) if top_k is None else min(top_k, len(bonus_table))

    per_day: dict[date, list[tuple[str, float]]] = {}
    for username, rows in histories.items():
        for record in normalize_records(rows):
            if record.diamonds_earned > 0:
                per_day.setdefault(record.date, []).append(
                    (username, record.diamonds_earned)
                )

    by_day: dict[date, dict[str, int]] = {}
    for day, entries in per_day.items():
        ranked = sorted(entries, key=lambda e: (-e[1], e[0]))[:k]
        by_day[day] = {username: bonus_table[i] for i, (username, _) in enumerate(ranked)}

    logger.info(
        "Built rank index: %d creators, %d ranked days, top %d",
        len(histories),
        len(by_day),
        k,
    )
    return RankIndex(by_day)
