"""
Game session management
Server-side state machine for one table of players

    SETUP -> ROUND_TARGET -> GAMEPLAY -> ROUND_TARGET ...
                                      -> FINAL_TARGETS -> FINAL_RESULTS -> RESULTS
                                      -> RESULTS (everyone eliminated)

The scoring rules themselves live in scoring / target_range / elimination;
this module only collects input, calls them and applies their output.
"""
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

from wiega import state
from wiega.core.elimination import evaluate_elimination, should_trigger_final_round
from wiega.core.scoring import summarize_round, apply_round_summary, compute_rankings
from wiega.core.target_range import compute_target_range, requires_auto_target, auto_target
from wiega.exceptions import (
    SessionNotFound, InvalidStateTransition, InvalidPlayerSetup, TargetOutOfRange
)
from wiega.models import (
    GamePhase, GameSession, GameSettings, Player, PlayerRanking, PlayerSetup,
    Round, RoundReport, TargetWindow, VesselSize
)
from wiega.normalizer import normalize_weights


logger = logging.getLogger(__name__)


def _settings(settings: Optional[GameSettings]) -> GameSettings:
    return settings if settings is not None else state.GAME_SETTINGS


def _require_phase(session: GameSession, phase: GamePhase, action: str) -> None:
    if session.phase != phase:
        raise InvalidStateTransition(session.phase.value, action)


def create_session(
    players: List[PlayerSetup],
    vessel_size: VesselSize = VesselSize.LARGE,
    settings: Optional[GameSettings] = None
) -> GameSession:
    """
    Create a new game and register it

    Args:
        players: Names and start weights, in seating order
        vessel_size: Vessel preset (decides the final-round trigger)
        settings: Rule constants (defaults to the loaded settings)

    Returns:
        GameSession waiting for the first target

    Raises:
        InvalidPlayerSetup: Wrong player count or non-positive start weight
    """
    settings = _settings(settings)

    if not settings.min_players <= len(players) <= settings.max_players:
        raise InvalidPlayerSetup(
            f"Player count must be between {settings.min_players} and {settings.max_players}, "
            f"got {len(players)}"
        )

    roster = []
    for i, setup in enumerate(players):
        if setup.start_weight <= 0:
            raise InvalidPlayerSetup(f"Start weight of player {i + 1} must be positive")
        name = setup.name.strip() or f"Spieler {i + 1}"
        roster.append(Player(id=f"p{i}", name=name, start_weight=setup.start_weight))

    session = GameSession(
        session_id=uuid.uuid4().hex,
        vessel_size=vessel_size,
        phase=GamePhase.ROUND_TARGET,
        players=roster,
        created_at=time.time()
    )
    state.SESSIONS[session.session_id] = session
    logger.info(f"🎲 Session {session.session_id} created with {len(roster)} players ({session.vessel_size.value} vessel)")
    return session


def get_session(session_id: str) -> GameSession:
    """Look up a session or raise SessionNotFound"""
    session = state.SESSIONS.get(session_id)
    if session is None:
        raise SessionNotFound(session_id)
    return session


def current_weights(session: GameSession) -> Dict[str, int]:
    """
    Most recent weight of every active player

    Start weights before the first round, last scored result afterwards.
    """
    scored = [r for r in session.rounds if r.results]
    last = scored[-1] if scored else None

    weights = {}
    for p in session.active_players():
        if last is not None and p.id in last.results:
            weights[p.id] = last.results[p.id]
        else:
            weights[p.id] = p.start_weight
    return weights


def get_target_window(session: GameSession, settings: Optional[GameSettings] = None) -> TargetWindow:
    """
    Allowed band for the next shared target

    When the field has spread too far apart, ``auto_target`` is set and the
    band is informational only.
    """
    settings = _settings(settings)
    weights = list(current_weights(session).values())

    band = compute_target_range(
        weights,
        min_gap=settings.min_gap_below_lowest,
        max_drop=settings.max_drop_below_highest
    )

    assigned = None
    if requires_auto_target(weights, settings.auto_target_spread):
        assigned = auto_target(weights, settings.min_gap_below_lowest)

    return TargetWindow(min=band.min, max=band.max, auto_target=assigned)


def announce_target(
    session: GameSession,
    target: Optional[int],
    settings: Optional[GameSettings] = None
) -> Round:
    """
    Open the next normal round with a shared target

    Args:
        session: Session in ROUND_TARGET
        target: Chosen target (g); may be None when the target is auto-assigned

    Returns:
        The new Round

    Raises:
        InvalidStateTransition: Not in ROUND_TARGET
        TargetOutOfRange: Target outside the window, or conflicting with the auto target
    """
    _require_phase(session, GamePhase.ROUND_TARGET, "announce a target")
    window = get_target_window(session, settings)

    if window.auto_target is not None:
        if target is not None and target != window.auto_target:
            raise TargetOutOfRange(target, window.auto_target, window.auto_target)
        target = window.auto_target
        logger.info(f"⚖️ Session {session.session_id}: weights diverged, target auto-assigned to {target}g")
    elif target is None or not window.min <= target <= window.max:
        raise TargetOutOfRange(target, window.min, window.max)

    new_round = Round(
        number=len(session.rounds) + 1,
        target=target,
        auto_target=window.auto_target is not None
    )
    session.rounds.append(new_round)
    session.phase = GamePhase.GAMEPLAY
    logger.info(f"🎯 Session {session.session_id}: round {new_round.number} target {target}g")
    return new_round


def _score_current_round(session: GameSession, settings: GameSettings) -> RoundReport:
    """Summarize, apply penalties and evaluate eliminations for the open round"""
    current = session.current_round()
    active = session.active_players()

    summary = summarize_round(current, active)
    apply_round_summary(session.players, summary)

    eliminations = {}
    for p in active:
        result = evaluate_elimination(
            current.results[p.id],
            current.effective_target(p.id),
            settings.elimination_tolerance
        )
        if result.eliminated:
            p.eliminated = True
            eliminations[p.id] = result
            logger.info(
                f"❌ Session {session.session_id}: {p.name} eliminated "
                f"({result.distance:+d}g from target)"
            )

    return RoundReport(round_number=current.number, summary=summary, eliminations=eliminations)


def submit_results(
    session: GameSession,
    raw_weights: Dict[str, Any],
    settings: Optional[GameSettings] = None
) -> RoundReport:
    """
    Record and score the weights of a normal round

    All active players must report; entries for eliminated players are ignored.
    Moves to FINAL_TARGETS when the final-round trigger fires, to RESULTS when
    nobody is left, otherwise back to ROUND_TARGET.

    Raises:
        InvalidStateTransition: Not in GAMEPLAY
        MissingResultError: An active player has no weight
        ValueError: A weight cannot be parsed
    """
    settings = _settings(settings)
    _require_phase(session, GamePhase.GAMEPLAY, "submit results")
    final_drop = settings.final_round_drop(session.vessel_size)

    weights = normalize_weights(raw_weights, [p.id for p in session.active_players()])
    session.current_round().results = weights

    report = _score_current_round(session, settings)

    remaining = session.active_players()
    if not remaining:
        session.phase = GamePhase.RESULTS
        logger.info(f"🏁 Session {session.session_id}: all players eliminated")
    elif should_trigger_final_round(
        [p.start_weight for p in session.players],
        [weights[p.id] for p in remaining],
        final_drop
    ):
        report.final_round_triggered = True
        session.phase = GamePhase.FINAL_TARGETS
        logger.info(f"🔔 Session {session.session_id}: final round triggered")
    else:
        session.phase = GamePhase.ROUND_TARGET

    session.last_report = report
    return report


def declare_final_targets(session: GameSession, raw_targets: Dict[str, Any]) -> Round:
    """
    Open the final round with every active player's personal target

    Raises:
        InvalidStateTransition: Not in FINAL_TARGETS
        MissingResultError: An active player has not declared a target
    """
    _require_phase(session, GamePhase.FINAL_TARGETS, "declare final targets")

    targets = normalize_weights(raw_targets, [p.id for p in session.active_players()])
    final_round = Round(
        number=len(session.rounds) + 1,
        individual_targets=targets,
        is_final=True
    )
    session.rounds.append(final_round)
    session.phase = GamePhase.FINAL_RESULTS
    logger.info(f"🎯 Session {session.session_id}: final round targets declared")
    return final_round


def submit_final_results(
    session: GameSession,
    raw_weights: Dict[str, Any],
    settings: Optional[GameSettings] = None
) -> RoundReport:
    """Record and score the final round, then close the game"""
    settings = _settings(settings)
    _require_phase(session, GamePhase.FINAL_RESULTS, "submit final results")

    weights = normalize_weights(raw_weights, [p.id for p in session.active_players()])
    session.current_round().results = weights

    report = _score_current_round(session, settings)
    session.phase = GamePhase.RESULTS
    session.last_report = report
    logger.info(f"🏁 Session {session.session_id}: final round scored")
    return report


def get_rankings(session: GameSession) -> List[PlayerRanking]:
    """Standings over all scored rounds"""
    scored = [r for r in session.rounds if r.results]
    return compute_rankings(session.players, scored)


def get_all_sessions_status() -> List[dict]:
    """Short status of every registered session"""
    return [
        {
            "session_id": sid,
            "phase": s.phase.value,
            "players": len(s.players),
            "active_players": len(s.active_players()),
            "rounds": len(s.rounds),
            "created_at": s.created_at
        }
        for sid, s in state.SESSIONS.items()
    ]


def reset_all_sessions() -> int:
    """Drop all sessions (testing only)"""
    count = len(state.SESSIONS)
    state.SESSIONS.clear()
    logger.info(f"🔄 Reset all sessions. Cleared {count} sessions.")
    return count
