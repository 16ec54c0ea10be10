"""
Global application state
Shared resources accessible across all modules
"""
from typing import Dict

from wiega.models import GameSession, GameSettings

# Rule constants (replaced at startup if a config file is present)
GAME_SETTINGS: GameSettings = GameSettings()

# Running games: session_id -> GameSession
SESSIONS: Dict[str, GameSession] = {}
