"""
NFL Playoff Scenario Engine

Seeding with NFL tiebreakers, Monte Carlo playoff probability and
best/worst case scenario search for a target team.
"""

from .models import (
    Team,
    Game,
    GameStatus,
    Outcome,
    CriticalGame,
    GameImpact,
    RecordLine,
    TiebreakRecords,
    PlayoffTeam,
    ScenarioResult,
    MonteCarloResult,
    ScenarioSearchResult,
    TeamNotFoundError,
)
from .records import build_tiebreak_records
from .tiebreakers import rank_division, rank_division_winners, break_tie_multi_team
from .engine import (
    determine_playoffs,
    seed_league,
    apply_outcomes,
    simulate_scenario,
    home_win_probability,
    run_monte_carlo,
)
from .critical import identify_critical_games
from .scenarios import find_best_case, find_worst_case
from .session import PlayoffSession, CalculationResult

__all__ = [
    # Models
    "Team",
    "Game",
    "GameStatus",
    "Outcome",
    "CriticalGame",
    "GameImpact",
    "RecordLine",
    "TiebreakRecords",
    "PlayoffTeam",
    "ScenarioResult",
    "MonteCarloResult",
    "ScenarioSearchResult",
    "TeamNotFoundError",
    # Records
    "build_tiebreak_records",
    # Tiebreakers
    "rank_division",
    "rank_division_winners",
    "break_tie_multi_team",
    # Engine
    "determine_playoffs",
    "seed_league",
    "apply_outcomes",
    "simulate_scenario",
    "home_win_probability",
    "run_monte_carlo",
    # Critical games
    "identify_critical_games",
    # Scenarios
    "find_best_case",
    "find_worst_case",
    # Session
    "PlayoffSession",
    "CalculationResult",
]
