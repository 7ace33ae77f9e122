"""
Abstract base class for NFL schedule and standings providers.

Providers supply the engine's inputs: standings for every team, the games
still to be played and the completed games tiebreaker records are built from.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..simulator.models import Game, Standings, TiebreakRecords
from ..simulator.records import build_tiebreak_records
from ..core.nfl import REGULAR_SEASON_WEEKS


@dataclass
class LeagueData:
    """Everything a calculation pass needs, as of one fetch."""

    season: int
    week: int
    standings: Standings
    remaining_games: List[Game]
    records: TiebreakRecords = field(default_factory=TiebreakRecords)


class ScheduleProvider(ABC):
    """Abstract base class for NFL data providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'espn')."""
        pass

    @abstractmethod
    async def fetch_season_info(self) -> Tuple[int, int]:
        """
        Fetch the current season and week.

        Returns:
            Tuple of (season year, week number)
        """
        pass

    @abstractmethod
    async def fetch_standings(self, season: int, current_week: int) -> Standings:
        """
        Fetch standings for every team.

        Args:
            season: The season year
            current_week: Latest week to take records from

        Returns:
            Teams keyed by abbreviation, best win percentage first
        """
        pass

    @abstractmethod
    async def fetch_remaining_games(self, season: int, current_week: int) -> List[Game]:
        """
        Fetch games that have not started, from the current week to the end
        of the regular season.
        """
        pass

    @abstractmethod
    async def fetch_completed_games(self, season: int, current_week: int) -> List[Game]:
        """Fetch final games from week 1 through the current week."""
        pass

    async def fetch_season(self, season: int, current_week: int) -> Tuple[Standings, List[Game], List[Game]]:
        """
        Fetch standings, remaining games and completed games together.

        Providers that can serve all three from the same downloads should
        override this.

        Returns:
            Tuple of (standings, remaining games, completed games)
        """
        standings = await self.fetch_standings(season, current_week)
        remaining = await self.fetch_remaining_games(season, current_week)
        completed = await self.fetch_completed_games(season, current_week)
        return standings, remaining, completed

    async def load_league(self, season: Optional[int] = None) -> LeagueData:
        """
        Fetch standings, remaining games and tiebreaker records in one call.

        Args:
            season: Season year; the current season when omitted. Any other
                season is loaded through its final regular-season week.

        Returns:
            LeagueData ready for a PlayoffSession
        """
        current_season, week = await self.fetch_season_info()
        if season is None or season == current_season:
            season = current_season
        else:
            week = REGULAR_SEASON_WEEKS

        standings, remaining, completed = await self.fetch_season(season, week)

        return LeagueData(
            season=season,
            week=week,
            standings=standings,
            remaining_games=remaining,
            records=build_tiebreak_records(completed, standings)
        )


class SeasonDataNotFoundError(Exception):
    """Raised when the provider has no data for the requested season/week."""
    pass


class PlatformError(Exception):
    """Raised when there's an error communicating with the provider."""
    pass
