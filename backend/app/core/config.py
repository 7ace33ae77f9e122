"""
Runtime configuration read from the environment.
"""

import os


# Simulation settings
MONTE_CARLO_ITERATIONS = int(os.getenv("MONTE_CARLO_ITERATIONS", "1000"))
HOME_FIELD_ADVANTAGE = float(os.getenv("HOME_FIELD_ADVANTAGE", "0.05"))

# 2^14 = 16,384 combinations is the most we enumerate exhaustively
MAX_EXHAUSTIVE_GAMES = int(os.getenv("MAX_EXHAUSTIVE_GAMES", "14"))
HEURISTIC_PRIMARY_TRIALS = int(os.getenv("HEURISTIC_PRIMARY_TRIALS", "3000"))
HEURISTIC_SECONDARY_TRIALS = int(os.getenv("HEURISTIC_SECONDARY_TRIALS", "1000"))

# ESPN public site API
ESPN_API_BASE = os.getenv(
    "ESPN_API_BASE",
    "https://site.api.espn.com/apis/site/v2/sports/football/nfl"
)
ESPN_TIMEOUT = float(os.getenv("ESPN_TIMEOUT", "30.0"))

# Used with the current season when ESPN does not report the week
FALLBACK_WEEK = 14

DEFAULT_TARGET_TEAM = os.getenv("DEFAULT_TARGET_TEAM", "CHI")

# In-memory sessions: least recently used are evicted past the cap or once idle too long
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "200"))
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", "3600"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
