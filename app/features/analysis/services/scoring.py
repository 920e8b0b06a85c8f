import math
from typing import Optional, Union

UNAVAILABLE = "unavailable"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (0.125 * 100 -> 13)."""
    return int(math.floor(value + 0.5))


def normalize_score(fraction: Optional[float]) -> Optional[int]:
    """Convert a fractional 0..1 score to an integer percentage, or None if absent."""
    if fraction is None or isinstance(fraction, bool) or not isinstance(fraction, (int, float)):
        return None
    return round_half_up(fraction * 100)


def composite_score(
    performance: Optional[int],
    accessibility: Optional[int],
    best_practices: Optional[int],
) -> Union[float, str]:
    """
    Mean of the three category scores.

    A missing or zero category makes the composite unavailable. A real 0
    is still reported on the category itself; only the composite drops it.
    """
    scores = (performance, accessibility, best_practices)
    if any(score is None or score == 0 for score in scores):
        return UNAVAILABLE
    return sum(scores) / len(scores)
