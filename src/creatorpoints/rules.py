"""Incentive rule set: point constants, rank bonuses and the streak table."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class RulesError(Exception):
    """Raised when a rules file cannot be loaded or fails validation."""


class ScoringRules(BaseModel):
    """Every constant the points engine uses, in one place.

    ``streak_bonuses`` is a list of ``(min_days, points)`` steps; the highest
    step the streak reaches wins.
    """

    rank_bonuses: list[int] = Field(default_factory=lambda: [25, 20, 15, 10, 5])

    diamond_threshold: float = 1000
    diamond_base_points: int = 10
    diamond_step: float = 1000
    diamond_step_points: int = 2

    hour_points: int = 3
    valid_day_hours: float = 1.0
    valid_day_points: int = 3

    streak_bonuses: list[tuple[int, int]] = Field(
        default_factory=lambda: [(30, 150), (20, 100), (10, 50), (5, 25), (3, 15)]
    )
    streak_min_gap_days: float = 0.5
    streak_max_gap_days: float = 1.5

    @field_validator("rank_bonuses")
    @classmethod
    def _non_negative_bonuses(cls, v: list[int]) -> list[int]:
        if any(b < 0 for b in v):
            raise ValueError("rank_bonuses must be non-negative")
        return v

    @field_validator("streak_bonuses")
    @classmethod
    def _sort_steps(cls, v: list[tuple[int, int]]) -> list[tuple[int, int]]:
        return sorted(v, key=lambda step: step[0], reverse=True)

    @field_validator("diamond_step")
    @classmethod
    def _positive_step(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("diamond_step must be positive")
        return v


DEFAULT_RULES = ScoringRules()


def load_rules(path: str | Path | None) -> ScoringRules:
    """Load a YAML rule set, falling back to the defaults.

    Keys missing from the file keep their default values. A missing path
    returns :data:`DEFAULT_RULES`; a malformed file raises :class:`RulesError`.
    """
    if path is None:
        return DEFAULT_RULES
    p = Path(path)
    if not p.exists():
        logger.warning("Rules file not found, using defaults: %s", p)
        return DEFAULT_RULES

    try:
        with open(p) as fh:
            raw: Any = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise RulesError(f"Could not parse rules file {p}: {exc}") from exc

    if not isinstance(raw, dict):
        raise RulesError(f"Rules file {p} must contain a mapping")

    # YAML has no tuples; accept either [[30, 150], ...] or {30: 150, ...}
    steps = raw.get("streak_bonuses")
    if isinstance(steps, dict):
        raw["streak_bonuses"] = [(int(k), int(v)) for k, v in steps.items()]

    try:
        rules = ScoringRules(**raw)
    except ValidationError as exc:
        raise RulesError(f"Invalid rules in {p}: {exc}") from exc

    logger.info(
        "Loaded rules from %s (%d rank bonuses, %d streak steps)",
        p,
        len(rules.rank_bonuses),
        len(rules.streak_bonuses),
    )
    return rules
