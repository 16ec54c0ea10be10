"""
Custom exceptions

All game-level errors live here so the API layer can map them in one place
"""


class WiegaError(Exception):
    """Base class for all game errors"""
    pass


# ============ Session errors ============

class SessionNotFound(WiegaError):
    """Session does not exist"""
    def __init__(self, session_id):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


class InvalidStateTransition(WiegaError):
    """Operation is not allowed in the current phase"""
    def __init__(self, phase, action):
        self.phase = phase
        self.action = action
        super().__init__(f"Cannot {action} while session is in phase {phase}")


class InvalidPlayerSetup(WiegaError):
    """Player count, names or start weights are not acceptable"""
    pass


# ============ Round errors ============

class MissingResultError(WiegaError, ValueError):
    """An active player has no recorded weight (or personal target)"""
    def __init__(self, player_ids):
        self.player_ids = list(player_ids)
        super().__init__(f"Missing weight for player(s): {', '.join(self.player_ids)}")


class TargetOutOfRange(WiegaError):
    """Announced target is outside the allowed window"""
    def __init__(self, target, min_weight, max_weight):
        self.target = target
        self.min_weight = min_weight
        self.max_weight = max_weight
        if target is None:
            message = f"A target between {min_weight}g and {max_weight}g is required"
        else:
            message = f"Target {target}g must be between {min_weight}g and {max_weight}g"
        super().__init__(message)
