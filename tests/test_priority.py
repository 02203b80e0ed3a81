"""
Unit tests for priority score banding.
"""
import random

import pytest

from taskmind.priority import FALLBACK_PRIORITY_SCORE, compute_priority_score


@pytest.mark.parametrize(
    "priority, low, high",
    [("high", 7, 9), ("medium", 4, 6), ("low", 1, 3)],
)
def test_score_stays_in_band(priority, low, high):
    rng = random.Random(0)
    scores = {compute_priority_score(priority, rng) for _ in range(200)}
    assert min(scores) >= low
    assert max(scores) <= high
    # every value in the band shows up eventually
    assert scores == set(range(low, high + 1))


def test_unknown_label_gets_fallback():
    assert compute_priority_score("someday") == FALLBACK_PRIORITY_SCORE


def test_default_rng_is_module_random():
    score = compute_priority_score("low")
    assert 1 <= score <= 3
