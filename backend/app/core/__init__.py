"""
Core utilities, league structure and configuration.
"""

from .nfl import (
    Conference,
    DIVISION_MAP,
    PLAYOFF_SPOTS,
    get_division,
    get_conference,
    get_current_season,
)

__all__ = [
    "Conference",
    "DIVISION_MAP",
    "PLAYOFF_SPOTS",
    "get_division",
    "get_conference",
    "get_current_season",
]
