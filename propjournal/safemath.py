"""Guarded arithmetic shared by the models and the analytics core.

Every ratio in the journal goes through these helpers so that a zero or
non-positive denominator yields 0 instead of an exception, ``inf`` or ``nan``.
"""

import math


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero or the result is not finite.

    Args:
        numerator: Dividend.
        denominator: Divisor.

    Returns:
        ``numerator / denominator`` or 0.0.
    """
    if denominator == 0:
        return 0.0
    result = numerator / denominator
    if not math.isfinite(result):
        return 0.0
    return result


def safe_percent(part: float, whole: float) -> float:
    """Express ``part`` as a percentage of ``whole``.

    Only a positive ``whole`` gives a meaningful ratio; anything else is 0.
    """
    if whole <= 0:
        return 0.0
    return safe_divide(part, whole) * 100


def percent_of(base: float, percent: float) -> float:
    """Dollar amount that ``percent`` represents of a positive ``base``."""
    if base <= 0:
        return 0.0
    return base * percent / 100


def capped_progress(current: float, limit: float) -> float:
    """Progress of ``current`` towards ``limit`` as a percentage in [0, 100]."""
    if limit <= 0:
        return 0.0
    return min(max(safe_divide(current, limit) * 100, 0.0), 100.0)
