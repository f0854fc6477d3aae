"""Rounding and duration helpers shared by handlers and services."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

SECONDS_PER_DAY = 24 * 60 * 60


def round_half_up(value: float, places: int = 0) -> float | int:
    """Round halves away from zero; returns an ``int`` when *places* is 0."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return float(rounded)


def percentage(part: int, whole: int, places: int = 0) -> float | int:
    """``part / whole * 100`` rounded half-up, or 0 when *whole* is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100, places)


def rounded_days(start: datetime, end: datetime) -> int:
    """Elapsed time between two timestamps, rounded to the nearest whole day."""
    return round_half_up((end - start).total_seconds() / SECONDS_PER_DAY)


def elapsed_days(start: datetime, end: datetime) -> int:
    """Number of complete days between two timestamps."""
    return (end - start).days
