"""
Data models for the weighing game
"""
from enum import Enum
from pydantic import BaseModel, field_validator
from typing import Any, List, Dict, Optional, Tuple


class VesselSize(str, Enum):
    """Vessel presets; each maps to a fixed drop that triggers the final round"""
    LARGE = "large"
    SMALL = "small"


class GamePhase(str, Enum):
    """
    Session phases

    SETUP only exists while create_session builds the roster; a registered
    session always starts in ROUND_TARGET.
    """
    SETUP = "SETUP"
    ROUND_TARGET = "ROUND_TARGET"
    GAMEPLAY = "GAMEPLAY"
    FINAL_TARGETS = "FINAL_TARGETS"
    FINAL_RESULTS = "FINAL_RESULTS"
    RESULTS = "RESULTS"


class GameSettings(BaseModel):
    """Rule constants for the game"""
    elimination_tolerance: int = 50     # max allowed |weight - target| in grams
    auto_target_spread: int = 90        # spread (highest - lowest) that forces an auto target
    min_gap_below_lowest: int = 10      # target must be at least this far below the lowest weight
    max_drop_below_highest: int = 100   # target must be at most this far below the highest weight
    final_round_drops: Dict[str, int] = {
        VesselSize.LARGE.value: 445,
        VesselSize.SMALL.value: 278,
    }
    min_players: int = 2
    max_players: int = 10

    @field_validator("final_round_drops")
    @classmethod
    def require_all_vessel_sizes(cls, value: Dict[str, int]) -> Dict[str, int]:
        missing = [v.value for v in VesselSize if v.value not in value]
        if missing:
            raise ValueError(f"final_round_drops is missing vessel size(s): {', '.join(missing)}")
        return value

    def final_round_drop(self, vessel_size: VesselSize) -> int:
        return self.final_round_drops[VesselSize(vessel_size).value]


class Player(BaseModel):
    """One participant, created at setup"""
    id: str
    name: str
    start_weight: int
    penalty_count: int = 0
    eliminated: bool = False


class Round(BaseModel):
    """
    One round of weighing

    Normal rounds share ``target``; the final round uses ``individual_targets``.
    """
    number: int
    target: Optional[int] = None
    individual_targets: Dict[str, int] = {}
    results: Dict[str, int] = {}       # player_id -> weight in grams
    is_final: bool = False
    auto_target: bool = False          # target was assigned, not chosen

    def effective_target(self, player_id: str) -> Optional[int]:
        if self.is_final:
            return self.individual_targets.get(player_id)
        return self.target


class RoundSummary(BaseModel):
    """Scoring outcome of one round (derived, never stored on its own)"""
    furthest_player_ids: List[str] = []
    exact_hit_ids: List[str] = []
    special_number_hits: List[Tuple[str, int]] = []          # (player_id, weight)
    duplicate_groups: List[Tuple[int, List[str]]] = []       # (weight, player_ids)
    penalized_player_ids: List[str] = []
    penalty_points: Dict[str, int] = {}                      # player_id -> points this round
    is_final: bool = False


class TargetRange(BaseModel):
    """Allowed band for the next target, may be inverted"""
    min: int
    max: int


class TargetWindow(BaseModel):
    """What the orchestrator offers for the next target"""
    min: int
    max: int
    auto_target: Optional[int] = None


class EliminationResult(BaseModel):
    eliminated: bool
    distance: int   # signed: weight - target


class PlayerRanking(BaseModel):
    """Final standings entry (lower total is better)"""
    rank: int
    player_id: str
    name: str
    penalty_count: int
    average_distance: float
    total: float
    eliminated: bool


class RoundReport(BaseModel):
    """What the last scored round produced, for display"""
    round_number: int
    summary: RoundSummary
    eliminations: Dict[str, EliminationResult] = {}   # only newly eliminated players
    final_round_triggered: bool = False


class GameSession(BaseModel):
    """Server-side state of one game"""
    session_id: str
    vessel_size: VesselSize = VesselSize.LARGE
    phase: GamePhase = GamePhase.SETUP
    players: List[Player] = []
    rounds: List[Round] = []
    last_report: Optional[RoundReport] = None
    created_at: float = 0.0

    def active_players(self) -> List[Player]:
        return [p for p in self.players if not p.eliminated]

    def current_round(self) -> Optional[Round]:
        return self.rounds[-1] if self.rounds else None


# ==================== REQUEST BODIES ====================

class PlayerSetup(BaseModel):
    name: str = ""
    start_weight: int


class CreateSessionRequest(BaseModel):
    players: List[PlayerSetup]
    vessel_size: VesselSize = VesselSize.LARGE


class TargetRequest(BaseModel):
    target: Optional[int] = None


class WeightsRequest(BaseModel):
    """player_id -> weight; values may be strings like "598g" """
    weights: Dict[str, Any]
