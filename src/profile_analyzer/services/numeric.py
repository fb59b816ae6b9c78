"""Small numeric and calendar helpers shared by the scorers and analytics."""

from __future__ import annotations

import calendar
import math
from datetime import datetime
from typing import Sequence


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def clamp(value: int, lo: int = 0, hi: int = 100) -> int:
    return max(lo, min(value, hi))


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation; 0 for an empty sequence."""
    if not values:
        return 0.0
    avg = mean(values)
    return math.sqrt(mean([(v - avg) ** 2 for v in values]))


def months_before(moment: datetime, months: int) -> datetime:
    """Step back *months* calendar months, clamping the day to the target month."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def format_count(num: int | None) -> str:
    """Render a count with a K/M suffix, e.g. ``1234 -> '1.2K'``."""
    if num is None:
        return "0"
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return str(num)
