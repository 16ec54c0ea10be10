"""
Tests for elimination and the final-round trigger
"""
from wiega.core.elimination import (
    evaluate_elimination,
    is_eliminated,
    should_trigger_final_round,
    ELIMINATION_TOLERANCE
)


def test_tolerance_default():
    assert ELIMINATION_TOLERANCE == 50


def test_eliminated_below_target():
    """80g under a 600g target → out"""
    result = evaluate_elimination(520, 600)
    assert result.eliminated is True
    assert result.distance == -80


def test_boundary_is_not_eliminated():
    """Exactly 50g away is still in"""
    assert is_eliminated(550, 600) is False
    assert is_eliminated(650, 600) is False
    assert evaluate_elimination(650, 600).distance == 50


def test_just_over_boundary():
    assert is_eliminated(549, 600) is True
    assert is_eliminated(651, 600) is True


def test_custom_tolerance():
    assert is_eliminated(570, 600, tolerance=20) is True
    assert is_eliminated(580, 600, tolerance=20) is False


def test_elimination_deterministic():
    for _ in range(5):
        assert is_eliminated(520, 600) is True


def test_final_round_trigger_large_vessel():
    """Threshold = lowest start weight - 445"""
    starts = [650, 700]
    assert should_trigger_final_round(starts, [210, 300], 445) is False
    assert should_trigger_final_round(starts, [205, 300], 445) is False
    assert should_trigger_final_round(starts, [204, 300], 445) is True


def test_final_round_trigger_small_vessel():
    starts = [650, 700]
    assert should_trigger_final_round(starts, [371], 278) is True
    assert should_trigger_final_round(starts, [372], 278) is False


def test_final_round_trigger_empty():
    assert should_trigger_final_round([], [100], 445) is False
    assert should_trigger_final_round([650], [], 445) is False
