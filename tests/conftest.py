import pytest
from fastapi.testclient import TestClient

from wiega import state
from wiega.main import app
from wiega.models import GameSettings


@pytest.fixture(autouse=True)
def clean_state():
    """Every test starts without sessions and with default rules"""
    state.SESSIONS.clear()
    state.GAME_SETTINGS = GameSettings()
    yield
    state.SESSIONS.clear()
    state.GAME_SETTINGS = GameSettings()


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        state.GAME_SETTINGS = GameSettings()
        yield test_client
