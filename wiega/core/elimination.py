"""
Elimination and final-round trigger

- A player whose |weight - target| exceeds the tolerance (50g) is out for good
- After a normal round, the final round starts once any active player drops
  below (lowest start weight - fixed drop); the drop depends on vessel size
"""
from typing import List
from wiega.models import EliminationResult


ELIMINATION_TOLERANCE = 50


def evaluate_elimination(weight: int, target: int, tolerance: int = ELIMINATION_TOLERANCE) -> EliminationResult:
    """
    Decide elimination for one player

    Args:
        weight: Reported weight (g)
        target: Effective target (shared or personal)
        tolerance: Allowed absolute distance

    Returns:
        EliminationResult with the signed distance (weight - target)

    Example:
        >>> evaluate_elimination(520, 600)
        EliminationResult(eliminated=True, distance=-80)
    """
    distance = weight - target
    return EliminationResult(eliminated=abs(distance) > tolerance, distance=distance)


def is_eliminated(weight: int, target: int, tolerance: int = ELIMINATION_TOLERANCE) -> bool:
    return evaluate_elimination(weight, target, tolerance).eliminated


def should_trigger_final_round(start_weights: List[int], current_weights: List[int], fixed_drop: int) -> bool:
    """
    Check whether the next round is the final round

    Args:
        start_weights: Start weights of the roster
        current_weights: Latest weights of the still active players
        fixed_drop: Vessel-size constant (445g large, 278g small)

    Returns:
        True if any current weight is below min(start_weights) - fixed_drop
    """
    if not start_weights or not current_weights:
        return False
    threshold = min(start_weights) - fixed_drop
    return any(w < threshold for w in current_weights)
