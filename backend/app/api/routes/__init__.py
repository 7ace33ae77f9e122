"""
API route modules.
"""

from .standings_routes import router as standings_router
from .sessions_routes import router as sessions_router

__all__ = ["standings_router", "sessions_router"]
