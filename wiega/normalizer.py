"""
Normalizer for weight and target input

Frontends send whatever the input field contains; everything is turned into
integer grams here before the scoring core sees it.

Accepted formats per value:
    598        (int)
    "598"
    "598g" / "598 g" / " 598 G "
"""
import re
from typing import Any, Dict, List
from wiega.exceptions import MissingResultError


WEIGHT_PATTERN = re.compile(r"^\s*(\d+)\s*(?:g)?\s*$", re.IGNORECASE)


def parse_weight(value: Any) -> int:
    """
    Parse one weight value into grams

    Args:
        value: int or string from the request body

    Returns:
        Non-negative integer grams

    Raises:
        ValueError: If the value is empty, non-numeric, fractional or negative
    """
    # bool is an int subclass
    if isinstance(value, bool):
        raise ValueError(f"Invalid weight: {value!r}")

    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Weight must not be negative, got: {value}")
        return value

    if isinstance(value, float):
        if not value.is_integer() or value < 0:
            raise ValueError(f"Weight must be a whole number of grams, got: {value}")
        return int(value)

    if not isinstance(value, str):
        raise ValueError(f"Invalid weight: {value!r}")

    match = WEIGHT_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid weight format. Expected grams like '598' or '598g', got: {value!r}")

    return int(match.group(1))


def normalize_weights(raw: Dict[str, Any], player_ids: List[str]) -> Dict[str, int]:
    """
    Normalize a player_id -> weight mapping for one round

    Entries for players outside ``player_ids`` (e.g. eliminated players) are
    dropped.

    Args:
        raw: Mapping from the request body
        player_ids: Players that must report

    Returns:
        player_id -> grams for exactly ``player_ids``

    Raises:
        MissingResultError: If a required player has no (or an empty) entry
        ValueError: If a value cannot be parsed
    """
    missing = [pid for pid in player_ids if raw.get(pid) in (None, "")]
    if missing:
        raise MissingResultError(missing)

    weights = {}
    for pid in player_ids:
        try:
            weights[pid] = parse_weight(raw[pid])
        except ValueError as e:
            raise ValueError(f"Player {pid}: {e}") from e

    return weights
