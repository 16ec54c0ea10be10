"""
Tests for the next-target band and the auto-target policy
"""
import random
from wiega.core.target_range import (
    compute_target_range,
    is_inverted,
    requires_auto_target,
    auto_target
)
from wiega.models import TargetRange


def test_range_from_start_weights():
    """650/630/640 → min 650-100, max 630-10"""
    r = compute_target_range([650, 630, 640])
    assert r == TargetRange(min=550, max=620)
    assert not is_inverted(r)


def test_range_empty():
    assert compute_target_range([]) == TargetRange(min=0, max=0)


def test_range_floors_at_zero():
    r = compute_target_range([50, 40])
    assert r.min == 0
    assert r.max == 30


def test_range_custom_gaps():
    r = compute_target_range([500, 480], min_gap=20, max_drop=50)
    assert r == TargetRange(min=450, max=460)


def test_range_inverted_when_diverged():
    """Spread of 100g → band inverts, caller must branch"""
    r = compute_target_range([700, 600])
    assert r.min == 600
    assert r.max == 590
    assert is_inverted(r)


def test_range_ordering_below_spread_threshold():
    """min <= max whenever highest - lowest < 90"""
    rng = random.Random(7)
    for _ in range(200):
        lowest = rng.randint(0, 800)
        weights = [lowest + rng.randint(0, 89) for _ in range(rng.randint(1, 10))]
        r = compute_target_range(weights)
        assert r.min <= r.max


def test_auto_target_threshold():
    """Spread >= 90 forces the assigned target"""
    assert requires_auto_target([690, 600]) is True
    assert requires_auto_target([689, 600]) is False
    assert requires_auto_target([700, 600]) is True
    assert requires_auto_target([]) is False


def test_auto_target_at_exact_threshold_is_still_valid():
    """At 90g spread the band is a single value equal to the auto target"""
    r = compute_target_range([690, 600])
    assert r.min == r.max == auto_target([690, 600]) == 590


def test_auto_target_value():
    assert auto_target([700, 600, 650]) == 590
    assert auto_target([5, 120]) == 0
    assert auto_target([700, 600], min_gap=20) == 580
