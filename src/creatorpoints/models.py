"""Domain models used across the scoring engine."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class DailyRecord(BaseModel):
    date: date
    diamonds_earned: float = 0.0
    hours_live: float = 0.0


class CreatorHistory(BaseModel):
    username: str
    records: list[DailyRecord] = Field(default_factory=list)


class PointsBreakdown(BaseModel):
    diamond_points: int = 0
    hour_points: int = 0
    valid_day_points: int = 0
    rank_bonus_points: int = 0
    streak_bonus_points: int = 0
    total: int = 0


class CreatorScore(BaseModel):
    username: str
    breakdown: PointsBreakdown = Field(default_factory=PointsBreakdown)
    streak_days: int = 0
    total_diamonds: float = 0.0
    total_hours: float = 0.0
    valid_days: int = 0
    adjustment_points: int = 0  # manual extras (graduations, rewards)
    balance: int = 0
