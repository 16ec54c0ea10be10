"""
Round Scoring Engine - Schnaps rules

Per round, every active player is compared against their effective target
(shared target, or personal target in the final round).

Rules:
  - Furthest from target: +1 for every player at the maximum distance (ties share)
  - Exact hit: +1 when weight == target
  - Special number: +1 when the raw weight is a "Schnapszahl" (normal rounds only)
  - Duplicate weight: +1 for every player sharing a weight with another (normal rounds only)
  - One point per qualifying category, so a player can collect several in one round

Final standings: total = average distance + penalty count (lower is better)
"""
from typing import List, Dict, Iterable
from wiega.exceptions import MissingResultError
from wiega.models import Player, Round, RoundSummary, PlayerRanking


SPECIAL_NUMBERS = frozenset([444, 333, 222, 111, 99, 88, 77, 66, 55, 44, 33])


def check_complete(round_: Round, players: Iterable[Player]) -> None:
    """
    Ensure every given player has a result (and a personal target in the final round)

    Raises:
        MissingResultError: listing the player ids without data
    """
    missing = [
        p.id for p in players
        if p.id not in round_.results or round_.effective_target(p.id) is None
    ]
    if missing:
        raise MissingResultError(missing)


def find_furthest(distances: Dict[str, int]) -> List[str]:
    """All player ids at the maximum distance, in input order"""
    if not distances:
        return []
    max_distance = max(distances.values())
    return [pid for pid, dist in distances.items() if dist == max_distance]


def group_duplicates(weights: Dict[str, int]) -> List[tuple]:
    """
    Group players by identical weight

    Args:
        weights: player_id -> weight, in roster order

    Returns:
        [(weight, [player_id, ...]), ...] for groups with at least two players,
        ordered by weight ascending
    """
    groups: Dict[int, List[str]] = {}
    for pid, weight in weights.items():
        groups.setdefault(weight, []).append(pid)

    return [(weight, ids) for weight, ids in sorted(groups.items()) if len(ids) > 1]


def summarize_round(round_: Round, active_players: List[Player]) -> RoundSummary:
    """
    Score one completed round

    Logic:
    1. distance = |weight - effective target| for each active player
    2. Furthest and exact-hit categories apply in every round
    3. Special numbers and duplicates apply in normal rounds only
    4. Points are counted per category (not deduplicated across categories)

    Args:
        round_: Round with results for every active player
        active_players: Non-eliminated players, in roster order

    Returns:
        RoundSummary (pure, the caller applies it)

    Raises:
        MissingResultError: If an active player has no result
    """
    check_complete(round_, active_players)

    weights = {p.id: round_.results[p.id] for p in active_players}
    distances = {
        pid: abs(weight - round_.effective_target(pid))
        for pid, weight in weights.items()
    }

    furthest = find_furthest(distances)
    exact = [pid for pid, dist in distances.items() if dist == 0]

    special_hits = []
    duplicates = []
    if not round_.is_final:
        special_hits = [(pid, w) for pid, w in weights.items() if w in SPECIAL_NUMBERS]
        duplicates = group_duplicates(weights)

    # One point per category
    points: Dict[str, int] = {}
    categories = [
        furthest,
        exact,
        [pid for pid, _ in special_hits],
        [pid for _, ids in duplicates for pid in ids],
    ]
    for ids in categories:
        for pid in ids:
            points[pid] = points.get(pid, 0) + 1

    penalized = [pid for pid in weights if pid in points]

    return RoundSummary(
        furthest_player_ids=furthest,
        exact_hit_ids=exact,
        special_number_hits=special_hits,
        duplicate_groups=duplicates,
        penalized_player_ids=penalized,
        penalty_points={pid: points[pid] for pid in penalized},
        is_final=round_.is_final
    )


def apply_round_summary(players: List[Player], summary: RoundSummary) -> List[Player]:
    """
    Add the round's penalty points to each player's count

    Args:
        players: Full roster (mutated in place)
        summary: Output of summarize_round

    Returns:
        The same roster list
    """
    for player in players:
        player.penalty_count += summary.penalty_points.get(player.id, 0)
    return players


def calculate_average_distance(player_id: str, rounds: List[Round]) -> float:
    """
    Mean |weight - target| over all rounds the player took part in

    Returns:
        0.0 when the player has no scored round
    """
    distances = []
    for r in rounds:
        weight = r.results.get(player_id)
        target = r.effective_target(player_id)
        if weight is not None and target is not None:
            distances.append(abs(weight - target))

    if not distances:
        return 0.0
    return sum(distances) / len(distances)


def compute_rankings(players: List[Player], rounds: List[Round]) -> List[PlayerRanking]:
    """
    Final standings

    total = average distance + penalty count, sorted ascending.
    Eliminated players stay in the table.
    """
    rows = []
    for p in players:
        avg = calculate_average_distance(p.id, rounds)
        rows.append({
            "player_id": p.id,
            "name": p.name,
            "penalty_count": p.penalty_count,
            "average_distance": round(avg, 2),
            "total": round(avg + p.penalty_count, 2),
            "eliminated": p.eliminated
        })

    # Stable: equal totals keep roster order
    rows.sort(key=lambda x: x["total"])

    return [PlayerRanking(rank=idx + 1, **row) for idx, row in enumerate(rows)]
