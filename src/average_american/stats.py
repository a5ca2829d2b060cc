from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Hashable, Mapping, Optional, Sequence, TypeVar

K = TypeVar("K", bound=Hashable)


def median(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2.0


def mode(distribution: Mapping[K, float]) -> Optional[K]:
    """Key with the largest value; on a tie the key iterated first wins."""
    best: Optional[K] = None
    best_value = None
    for key, value in distribution.items():
        if best_value is None or value > best_value:
            best, best_value = key, value
    return best


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round half away from zero, using the decimal text of ``value``.

    ``round()`` rounds half to even and works on the binary float, so
    ``round(1985.5)`` is 1986 but ``round(1984.5)`` is 1984.
    """
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))
