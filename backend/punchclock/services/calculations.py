"""Small numeric helpers shared by the aggregator and the detectors."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round .5 away from zero, the way report figures are expected to round."""
    multiplier = 10 ** decimals
    return math.floor(abs(value) * multiplier + 0.5) / multiplier * (1 if value >= 0 else -1)


def round_int(value: float) -> int:
    return int(round_half_up(value))


def percentage(part: float, total: float) -> int:
    if not total:
        return 0
    return round_int(part / total * 100)


def average(values: Iterable[float], decimals: int = 2) -> float:
    items = list(values)
    if not items:
        return 0.0
    return round_half_up(sum(items) / len(items), decimals)


def standard_deviation(values: Iterable[float]) -> float:
    """Population standard deviation; 0 for fewer than two values."""
    items = list(values)
    if len(items) <= 1:
        return 0.0
    mean = sum(items) / len(items)
    variance = sum((v - mean) ** 2 for v in items) / len(items)
    return math.sqrt(variance)


def distribution(items: Iterable[T], key: Callable[[T], str]) -> dict[str, int]:
    result: dict[str, int] = {}
    for item in items:
        group = key(item)
        result[group] = result.get(group, 0) + 1
    return result

