"""
Pydantic schemas for API request/response validation.
"""

from datetime import datetime
from typing import Optional, List, Dict
from pydantic import BaseModel, Field

from ..core.config import MONTE_CARLO_ITERATIONS


# ============== Standings Schemas ==============

class TeamResponse(BaseModel):
    """A team and its record."""
    id: str
    abbr: str
    name: str
    division: str
    conference: str
    wins: int
    losses: int
    ties: int
    record: str
    win_pct: float


class PlayoffTeamResponse(TeamResponse):
    """A seeded playoff team."""
    seed: int
    is_division_winner: bool
    is_wild_card: bool
    tiebreak_reason: Optional[str] = None


class StandingsResponse(BaseModel):
    """League standings and the playoff picture per conference."""
    season: int
    week: int
    teams: List[TeamResponse]
    playoff_picture: Dict[str, List[PlayoffTeamResponse]]


# ============== Game Schemas ==============

class GameImpactResponse(BaseModel):
    score: int
    label: str


class CriticalGameResponse(BaseModel):
    """A remaining game that matters to the target team."""
    id: str
    week: int
    home: str
    away: str
    date: Optional[datetime] = None
    status: str
    home_record: str
    away_record: str
    impact: GameImpactResponse


class DecidedGameResponse(CriticalGameResponse):
    """A critical game with the outcome a scenario assigns it."""
    outcome: str
    winner: str


# ============== Session Schemas ==============

class SessionCreateRequest(BaseModel):
    """Start a calculation session."""
    target_team: Optional[str] = Field(None, min_length=2, max_length=4)
    weighted: bool = True
    season: Optional[int] = None  # Defaults to current season


class TargetUpdateRequest(BaseModel):
    """Switch the target team."""
    target_team: str = Field(..., min_length=2, max_length=4)


class ModeUpdateRequest(BaseModel):
    """Switch between random and weighted simulation."""
    weighted: bool


class OutcomeUpdateRequest(BaseModel):
    """Lock a game outcome, or reset it."""
    outcome: str = Field(..., pattern="^(home|away|reset)$")


class CalculateRequest(BaseModel):
    """Run a calculation pass."""
    n_simulations: int = Field(default=MONTE_CARLO_ITERATIONS, ge=100, le=100000)


class SessionResponse(BaseModel):
    """Session state."""
    session_id: str
    season: int
    week: int
    target: str
    weighted: bool
    user_outcomes: Dict[str, str]
    critical_games: List[CriticalGameResponse]


# ============== Calculation Schemas ==============

class MonteCarloResponse(BaseModel):
    playoff_probability: float
    playoff_count: int
    total_iterations: int
    seed_counts: Dict[int, int]


class ScenarioResultResponse(BaseModel):
    playoff_teams: List[PlayoffTeamResponse]
    made_playoffs: bool
    seed: Optional[int]
    division_rank: int
    wildcard_rank: Optional[int]


class ScenarioSearchResponse(BaseModel):
    """Best or worst case for the target team."""
    outcomes: Dict[str, str]
    result: ScenarioResultResponse
    games_set: List[DecidedGameResponse]
    exhaustive: bool


class CalculationResponse(BaseModel):
    """Full calculation pass results."""
    session_id: str
    target: str
    weighted: bool
    critical_games: List[CriticalGameResponse]
    monte_carlo: MonteCarloResponse
    best_case: ScenarioSearchResponse
    worst_case: ScenarioSearchResponse
    playoff_picture: List[PlayoffTeamResponse]
