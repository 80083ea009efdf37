"""
Main FastAPI application for the Wrestling Meet Manager.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wrestling_meet.api import routes
from wrestling_meet.core.config import CORS_ORIGINS, LOG_LEVEL
from wrestling_meet.core.logging_config import setup_logging

setup_logging(LOG_LEVEL)

app = FastAPI(
    title="Wrestling Meet Manager API",
    description="API for rosters, weigh-ins, dual meet setup and match scoring",
    version="1.0.0"
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Wrestling Meet Manager API",
        "version": "1.0.0",
        "endpoints": {
            "teams": "/api/teams",
            "wrestlers": "/api/wrestlers",
            "dual_meets": "/api/dual-meets",
            "bout_order": "/api/dual-meets/bout-order",
            "matches": "/api/matches",
            "health": "/api/health"
        }
    }
