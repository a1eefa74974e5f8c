"""Derived ranking metrics.

Pure functions: the upstream service does not supply these values
reliably, so every data source (live or placeholder) goes through the
same formulas.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

POINTS_PER_LEVEL = 300


def level(score: float) -> int:
    """Level for a score: one level per 300 points, starting at 1."""
    return int(max(0.0, float(score)) // POINTS_PER_LEVEL) + 1


def win_rate(wins: int, games_played: int) -> float:
    """Win percentage rounded half-up to one decimal; 0.0 when no games were played."""
    if games_played <= 0:
        return 0.0
    rate = Decimal((wins / games_played) * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(rate)


def losses(wins: int, games_played: int) -> int:
    return max(0, games_played - wins)


def average_level(levels: Iterable[int]) -> int:
    values = list(levels)
    if not values:
        return 1
    return sum(values) // len(values)


def average_score(scores: Iterable[float]) -> int:
    values = list(scores)
    if not values:
        return 0
    return int(sum(values) // len(values))


def wait_time_ms(joined_at: Optional[datetime], now: datetime) -> int:
    """Milliseconds since ``joined_at``, clamped at 0 for clock skew."""
    if joined_at is None:
        return 0
    elapsed = (now - joined_at).total_seconds() * 1000.0
    return max(0, int(elapsed))
