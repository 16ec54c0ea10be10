"""
Game session endpoints
"""
from fastapi import APIRouter, HTTPException
import logging

from wiega.core import session as session_core
from wiega.exceptions import (
    WiegaError, SessionNotFound, InvalidStateTransition
)
from wiega.models import (
    CreateSessionRequest, GamePhase, GameSession, RoundReport, TargetRequest, WeightsRequest
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _to_http(exc: Exception) -> HTTPException:
    """Map game errors onto HTTP status codes"""
    if isinstance(exc, SessionNotFound):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidStateTransition):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


def _load(session_id: str) -> GameSession:
    try:
        return session_core.get_session(session_id)
    except SessionNotFound as exc:
        raise _to_http(exc) from exc


def _session_view(session: GameSession) -> dict:
    """Session payload with the next target window when one is expected"""
    data = session.model_dump(mode="json")
    data["current_weights"] = session_core.current_weights(session)
    data["target_window"] = None
    if session.phase == GamePhase.ROUND_TARGET:
        data["target_window"] = session_core.get_target_window(session).model_dump()
    return data


def _report_view(session: GameSession, report: RoundReport) -> dict:
    names = {p.id: p.name for p in session.players}
    return {
        "phase": session.phase.value,
        "report": report.model_dump(mode="json"),
        "names": names
    }


@router.post("", status_code=201)
async def create_session(payload: CreateSessionRequest):
    """
    Start a new game

    Request:
        {
            "players": [{"name": "Anna", "start_weight": 650}, ...],
            "vessel_size": "large"   # optional, "large" | "small"
        }
    """
    try:
        session = session_core.create_session(payload.players, payload.vessel_size)
    except WiegaError as exc:
        raise _to_http(exc) from exc
    return _session_view(session)


@router.get("/{session_id}")
async def get_session(session_id: str):
    """Full session state"""
    return _session_view(_load(session_id))


@router.get("/{session_id}/target-range")
async def get_target_range(session_id: str):
    """Allowed band (and auto target, if any) for the next round"""
    session = _load(session_id)
    window = session_core.get_target_window(session)
    return {
        "round": len(session.rounds) + 1,
        "current_weights": session_core.current_weights(session),
        **window.model_dump()
    }


@router.post("/{session_id}/target")
async def announce_target(session_id: str, payload: TargetRequest):
    """
    Announce the shared target of the next round

    Request:
        {"target": 600}   # may be omitted when the target is auto-assigned
    """
    session = _load(session_id)
    try:
        new_round = session_core.announce_target(session, payload.target)
    except WiegaError as exc:
        raise _to_http(exc) from exc
    return {
        "phase": session.phase.value,
        "round": new_round.model_dump()
    }


@router.post("/{session_id}/results")
async def submit_results(session_id: str, payload: WeightsRequest):
    """
    Report the weights of the current round

    Request:
        {"weights": {"p0": 598, "p1": "605g", "p2": "600"}}
    """
    session = _load(session_id)
    try:
        report = session_core.submit_results(session, payload.weights)
    except (WiegaError, ValueError) as exc:
        logger.info(f"Rejected results for session {session_id}: {exc}")
        raise _to_http(exc) from exc
    return _report_view(session, report)


@router.post("/{session_id}/final-targets")
async def declare_final_targets(session_id: str, payload: WeightsRequest):
    """
    Declare every active player's estimated empty-vessel weight

    Request:
        {"weights": {"p0": 75, "p1": 80}}
    """
    session = _load(session_id)
    try:
        final_round = session_core.declare_final_targets(session, payload.weights)
    except (WiegaError, ValueError) as exc:
        raise _to_http(exc) from exc
    return {
        "phase": session.phase.value,
        "round": final_round.model_dump()
    }


@router.post("/{session_id}/final-results")
async def submit_final_results(session_id: str, payload: WeightsRequest):
    """Report the weights of the final round"""
    session = _load(session_id)
    try:
        report = session_core.submit_final_results(session, payload.weights)
    except (WiegaError, ValueError) as exc:
        raise _to_http(exc) from exc
    return _report_view(session, report)


@router.get("/{session_id}/rankings")
async def get_rankings(session_id: str):
    """Standings (lower total is better)"""
    session = _load(session_id)
    rankings = session_core.get_rankings(session)
    return {
        "phase": session.phase.value,
        "finished": session.phase == GamePhase.RESULTS,
        "rankings": [r.model_dump() for r in rankings]
    }


@router.get("/{session_id}/history")
async def get_history(session_id: str):
    """All rounds with per-player weight, target and distance"""
    session = _load(session_id)

    rounds = []
    for r in session.rounds:
        entries = {}
        for pid, weight in r.results.items():
            target = r.effective_target(pid)
            entries[pid] = {
                "weight": weight,
                "target": target,
                "distance": abs(weight - target) if target is not None else None
            }
        rounds.append({
            "number": r.number,
            "is_final": r.is_final,
            "target": r.target,
            "auto_target": r.auto_target,
            "results": entries
        })

    return {
        "players": [p.model_dump() for p in session.players],
        "rounds": rounds
    }
