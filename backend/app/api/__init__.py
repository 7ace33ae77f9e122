"""
API module.
"""

from .routes import standings_router, sessions_router
from .store import SessionStore, get_session_store, get_provider

__all__ = [
    "standings_router",
    "sessions_router",
    "SessionStore",
    "get_session_store",
    "get_provider",
]
