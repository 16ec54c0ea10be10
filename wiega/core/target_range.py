"""
Target range for the next round

The next target must be
  - at least 10g below the lowest current weight (keeps everyone drinking)
  - at most 100g below the highest current weight (no impossible drops)

  max = lowest - 10
  min = highest - 100

Once weights drift apart by 90g or more the band collapses or inverts; the
auto-target policy below takes over and assigns lowest - 10 directly.
"""
from typing import List
from wiega.models import TargetRange


MIN_GAP_BELOW_LOWEST = 10
MAX_DROP_BELOW_HIGHEST = 100
AUTO_TARGET_SPREAD = 90


def compute_target_range(
    previous_weights: List[int],
    min_gap: int = MIN_GAP_BELOW_LOWEST,
    max_drop: int = MAX_DROP_BELOW_HIGHEST
) -> TargetRange:
    """
    Compute the band for the next target

    Args:
        previous_weights: Active players' most recent weights
            (start weights before round 1)
        min_gap: Required distance below the lowest weight
        max_drop: Allowed distance below the highest weight

    Returns:
        TargetRange, possibly inverted (min > max); bounds never go below 0

    Example:
        >>> compute_target_range([650, 630, 640])
        TargetRange(min=550, max=620)
    """
    if not previous_weights:
        return TargetRange(min=0, max=0)

    highest = max(previous_weights)
    lowest = min(previous_weights)

    return TargetRange(
        min=max(0, highest - max_drop),
        max=max(0, lowest - min_gap)
    )


def is_inverted(target_range: TargetRange) -> bool:
    """True when no target can satisfy both bounds"""
    return target_range.min > target_range.max


def requires_auto_target(previous_weights: List[int], spread_threshold: int = AUTO_TARGET_SPREAD) -> bool:
    """
    Check whether the spread between players forces an assigned target

    Args:
        previous_weights: Active players' most recent weights
        spread_threshold: highest - lowest at which free choice is dropped

    Returns:
        True if highest - lowest >= spread_threshold
    """
    if not previous_weights:
        return False
    return max(previous_weights) - min(previous_weights) >= spread_threshold


def auto_target(previous_weights: List[int], min_gap: int = MIN_GAP_BELOW_LOWEST) -> int:
    """Assigned target for a divergent field: lowest - min_gap (never below 0)"""
    return max(0, min(previous_weights) - min_gap)
