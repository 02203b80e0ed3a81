"""
Priority score banding for tasks.

A task's `priority` is the authoritative label; `priority_score` is a derived
numeric rank used for sorting. When a task is created without an explicit
score, it gets a random score inside the band of its label.
"""
from __future__ import annotations

import random
from typing import Optional

from taskmind.constants import PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM

PRIORITY_SCORE_BANDS = {
    PRIORITY_HIGH: (7, 9),
    PRIORITY_MEDIUM: (4, 6),
    PRIORITY_LOW: (1, 3),
}
FALLBACK_PRIORITY_SCORE = 5


def compute_priority_score(priority: str, rng: Optional[random.Random] = None) -> int:
    """
    Pick a score for a priority label.

    Args:
        priority: 'high', 'medium' or 'low'
        rng: Optional random source (tests pass a seeded Random)

    Returns:
        Integer in the label's band (inclusive), or 5 for an unknown label.

    Examples:
        >>> 7 <= compute_priority_score("high") <= 9
        True
        >>> compute_priority_score("someday")
        5
    """
    band = PRIORITY_SCORE_BANDS.get(priority)
    if band is None:
        return FALLBACK_PRIORITY_SCORE
    low, high = band
    return (rng or random).randint(low, high)
