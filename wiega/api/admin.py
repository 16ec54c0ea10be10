"""
Admin endpoints for session management
"""
from fastapi import APIRouter
import logging

from wiega.core.session import get_all_sessions_status, reset_all_sessions


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/sessions")
async def get_sessions():
    """Get status of all game sessions"""
    sessions = get_all_sessions_status()

    return {
        "sessions": sessions,
        "total": len(sessions),
        "finished": len([s for s in sessions if s["phase"] == "RESULTS"])
    }


@router.post("/reset")
async def reset_sessions():
    """Drop all game sessions"""
    count = reset_all_sessions()

    return {
        "success": True,
        "cleared": count,
        "message": "All game sessions reset"
    }
