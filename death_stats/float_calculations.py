"""Rounded percentages and averages for the JSON report."""

from __future__ import annotations

import math


def _round_half_up(value: float, digits: int = 2) -> float:
    # Values here are never negative, so flooring after the offset rounds half away from zero.
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def calculate_percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return _round_half_up(count / total * 100)


def calculate_average(distance: float, count: int) -> float:
    if count == 0:
        return 0.0
    return _round_half_up(distance / count)
