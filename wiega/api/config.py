"""
Configuration endpoints
"""
from fastapi import APIRouter

from wiega import state
from wiega.core.scoring import SPECIAL_NUMBERS


router = APIRouter(tags=["config"])


@router.get("/config")
async def get_config():
    """Active rule constants"""
    return {
        "settings": state.GAME_SETTINGS.model_dump(),
        "special_numbers": sorted(SPECIAL_NUMBERS, reverse=True)
    }
