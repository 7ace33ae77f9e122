"""
NFL Playoff Scenario Calculator - FastAPI Application

Main entry point for the web API.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import standings_router, sessions_router
from .core.config import CORS_ORIGINS, LOG_LEVEL


logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logging.getLogger("app").setLevel(LOG_LEVEL)

# Create FastAPI app
app = FastAPI(
    title="NFL Playoff Scenario Calculator",
    description="Playoff probabilities, critical games and best/worst case scenarios for NFL teams.",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(standings_router, prefix="/api")
app.include_router(sessions_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "NFL Playoff Scenario Calculator API",
        "version": "1.0.0",
        "docs": "/api/docs",
        "health": "/api/health"
    }
