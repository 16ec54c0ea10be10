"""
Health check and system status endpoints
"""
from fastapi import APIRouter
from wiega import state


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "1. Bundeswiega - Scoring Server",
        "version": "1.0.0",
        "active_sessions": len(state.SESSIONS)
    }
