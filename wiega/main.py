"""
FastAPI main application
1. Bundeswiega - scoring server for the weighing game

Routers in wiega/api/:
- health.py: Health check
- sessions.py: Game flow (targets, results, final round, rankings)
- admin.py: Session overview and reset
- config.py: Active rule constants

All routers access shared state via the wiega.state module.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from wiega import state
from wiega.config import get_config_path, load_config

from wiega.api import health, admin, sessions
from wiega.api import config as config_router


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: load rule constants, fall back to defaults
    config_path = get_config_path()
    try:
        state.GAME_SETTINGS = load_config(config_path)
    except FileNotFoundError:
        logger.warning(f"⚠️ {config_path} not found, using default game settings")
    logger.info(
        f"✅ Server started (tolerance {state.GAME_SETTINGS.elimination_tolerance}g, "
        f"final-round drops {state.GAME_SETTINGS.final_round_drops})"
    )

    yield

    # Shutdown
    logger.info(f"🛑 Server shutting down with {len(state.SESSIONS)} open sessions")


# Create FastAPI app
app = FastAPI(
    title="1. Bundeswiega - Scoring Server",
    description="Round scoring, target ranges and eliminations for the weighing game",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /)
app.include_router(health.router)

# Game flow (POST /sessions, /sessions/{id}/target, ...)
app.include_router(sessions.router)

# Admin endpoints (GET /admin/sessions, POST /admin/reset)
app.include_router(admin.router)

# Config endpoint (GET /config)
app.include_router(config_router.router)


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
