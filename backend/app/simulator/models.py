"""
Data models for the playoff scenario engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Tuple, Optional


class Outcome(str, Enum):
    """Winning side of a game."""
    HOME = "home"
    AWAY = "away"


class GameStatus(str, Enum):
    """Game state as reported by the schedule provider."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    FINAL = "final"


@dataclass
class Team:
    """An NFL team and its current record."""

    id: str
    abbr: str
    name: str
    division: str
    conference: str
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def record_str(self) -> str:
        if self.ties:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def win_pct(self) -> float:
        total = self.games_played
        if total == 0:
            return 0.0
        return (self.wins + 0.5 * self.ties) / total

    def copy(self) -> 'Team':
        """Create a copy of this team for simulation."""
        return Team(
            id=self.id,
            abbr=self.abbr,
            name=self.name,
            division=self.division,
            conference=self.conference,
            wins=self.wins,
            losses=self.losses,
            ties=self.ties
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "abbr": self.abbr,
            "name": self.name,
            "division": self.division,
            "conference": self.conference,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "record": self.record_str,
            "win_pct": self.win_pct
        }


Standings = Dict[str, Team]


@dataclass
class Game:
    """A scheduled or completed game between two teams, referenced by abbreviation."""

    id: str
    week: int
    home: str
    away: str
    date: Optional[datetime] = None
    status: GameStatus = GameStatus.SCHEDULED
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    home_record: str = "0-0"
    away_record: str = "0-0"

    @property
    def is_pending(self) -> bool:
        return self.status == GameStatus.SCHEDULED

    @property
    def is_final(self) -> bool:
        return self.status == GameStatus.FINAL

    @property
    def winner(self) -> Optional[str]:
        """Winning abbreviation of a final game, None for ties and unfinished games."""
        if not self.is_final or self.home_score is None or self.away_score is None:
            return None
        if self.home_score > self.away_score:
            return self.home
        if self.away_score > self.home_score:
            return self.away
        return None

    def involves(self, abbr: str) -> bool:
        return self.home == abbr or self.away == abbr

    def team_for(self, outcome: Outcome) -> str:
        """Abbreviation of the team on the given side."""
        return self.home if outcome == Outcome.HOME else self.away

    def outcome_for(self, abbr: str) -> Outcome:
        """Side that gives a win to the given team."""
        return Outcome.HOME if abbr == self.home else Outcome.AWAY

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "week": self.week,
            "home": self.home,
            "away": self.away,
            "date": self.date.isoformat() if self.date else None,
            "status": self.status.value,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "home_record": self.home_record,
            "away_record": self.away_record
        }


@dataclass
class GameImpact:
    """How much a game matters to the target team."""

    score: int
    label: str


@dataclass
class CriticalGame:
    """A remaining game annotated with its impact on the target team."""

    game: Game
    impact: GameImpact

    @property
    def id(self) -> str:
        return self.game.id

    @property
    def home(self) -> str:
        return self.game.home

    @property
    def away(self) -> str:
        return self.game.away

    def to_dict(self) -> dict:
        data = self.game.to_dict()
        data["impact"] = {"score": self.impact.score, "label": self.impact.label}
        return data


# game id -> winning side
Outcomes = Dict[str, Outcome]


@dataclass
class RecordLine:
    """Wins, losses and ties in a subset of games (conference, division, ...)."""

    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_pct(self) -> float:
        if self.games == 0:
            return 0.0
        return (self.wins + 0.5 * self.ties) / self.games

    @property
    def record_str(self) -> str:
        return f"{self.wins}-{self.losses}"

    def add(self, result: str) -> None:
        """Record a 'W', 'L' or 'T'."""
        if result == "W":
            self.wins += 1
        elif result == "L":
            self.losses += 1
        else:
            self.ties += 1


# (team, opponent) -> team's record; directional, so (A, B) and (B, A) differ
PairRecords = Dict[Tuple[str, str], RecordLine]

EMPTY_RECORD = RecordLine()


@dataclass
class TiebreakRecords:
    """Season tiebreaker aggregates derived from completed games. Read-only during a pass."""

    conference: Dict[str, RecordLine] = field(default_factory=dict)
    division: Dict[str, RecordLine] = field(default_factory=dict)
    common_games: PairRecords = field(default_factory=dict)
    head_to_head: PairRecords = field(default_factory=dict)

    def conference_record(self, abbr: str) -> RecordLine:
        return self.conference.get(abbr, EMPTY_RECORD)

    def division_record(self, abbr: str) -> RecordLine:
        return self.division.get(abbr, EMPTY_RECORD)

    def common_games_record(self, team: str, opponent: str) -> RecordLine:
        """Team's record against opponents it shares with ``opponent``."""
        return self.common_games.get((team, opponent), EMPTY_RECORD)

    def head_to_head_record(self, team: str, opponent: str) -> RecordLine:
        return self.head_to_head.get((team, opponent), EMPTY_RECORD)


@dataclass
class PlayoffTeam:
    """A seeded team produced by one seeding pass."""

    team: Team
    seed: int
    is_division_winner: bool = False
    is_wild_card: bool = False
    tiebreak_reason: Optional[str] = None

    @property
    def abbr(self) -> str:
        return self.team.abbr

    def to_dict(self) -> dict:
        data = self.team.to_dict()
        data.update({
            "seed": self.seed,
            "is_division_winner": self.is_division_winner,
            "is_wild_card": self.is_wild_card,
            "tiebreak_reason": self.tiebreak_reason
        })
        return data


@dataclass
class ScenarioResult:
    """The target team's fate under one complete outcome assignment."""

    standings: Standings
    playoff_teams: List[PlayoffTeam]
    made_playoffs: bool
    seed: Optional[int]
    division_rank: int
    wildcard_rank: Optional[int]

    def to_dict(self) -> dict:
        return {
            "playoff_teams": [t.to_dict() for t in self.playoff_teams],
            "made_playoffs": self.made_playoffs,
            "seed": self.seed,
            "division_rank": self.division_rank,
            "wildcard_rank": self.wildcard_rank
        }


@dataclass
class MonteCarloResult:
    """Aggregated Monte Carlo results for the target team."""

    playoff_probability: float
    playoff_count: int
    total_iterations: int
    seed_counts: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "playoff_probability": self.playoff_probability,
            "playoff_count": self.playoff_count,
            "total_iterations": self.total_iterations,
            "seed_counts": self.seed_counts
        }


@dataclass
class DecidedGame:
    """A critical game together with the outcome a scenario assigns it."""

    game: CriticalGame
    outcome: Outcome
    winner: str

    def to_dict(self) -> dict:
        data = self.game.to_dict()
        data["outcome"] = self.outcome.value
        data["winner"] = self.winner
        return data


@dataclass
class ScenarioSearchResult:
    """Best or worst outcome assignment found for the target team."""

    outcomes: Outcomes
    result: ScenarioResult
    games_set: List[DecidedGame]
    exhaustive: bool

    def to_dict(self) -> dict:
        return {
            "outcomes": {gid: o.value for gid, o in self.outcomes.items()},
            "result": self.result.to_dict(),
            "games_set": [g.to_dict() for g in self.games_set],
            "exhaustive": self.exhaustive
        }


class TeamNotFoundError(KeyError):
    """Raised when the target team is not present in the standings."""
    pass
