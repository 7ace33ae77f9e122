"""
ESPN scoreboard provider.

Builds standings and schedules from ESPN's public NFL site API. No API key
is needed.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .base import ScheduleProvider, SeasonDataNotFoundError, PlatformError
from ..simulator.models import Game, GameStatus, Standings, Team
from ..core.config import ESPN_API_BASE, ESPN_TIMEOUT, FALLBACK_WEEK
from ..core.nfl import REGULAR_SEASON_WEEKS, get_conference, get_current_season, get_division


logger = logging.getLogger(__name__)

REGULAR_SEASON = 2


def parse_record_summary(summary: Optional[str]) -> Tuple[int, int, int]:
    """Parse an ESPN record summary like '9-3' or '8-3-1'; malformed parts count as 0."""
    if not summary:
        return 0, 0, 0

    parts = []
    for part in summary.split("-")[:3]:
        try:
            parts.append(int(part))
        except ValueError:
            parts.append(0)
    while len(parts) < 3:
        parts.append(0)
    return parts[0], parts[1], parts[2]


def _parse_status(competition: Dict[str, Any]) -> GameStatus:
    status_type = competition.get("status", {}).get("type", {})
    if status_type.get("completed"):
        return GameStatus.FINAL
    if status_type.get("state") == "in":
        return GameStatus.IN_PROGRESS
    if status_type.get("state") == "post":
        return GameStatus.FINAL
    return GameStatus.SCHEDULED


def _parse_score(competitor: Dict[str, Any]) -> Optional[int]:
    score = competitor.get("score")
    if score in (None, ""):
        return None
    try:
        return int(score)
    except (TypeError, ValueError):
        return None


def _order_standings(teams: Dict[str, Team]) -> Standings:
    ordered = sorted(teams.values(), key=lambda t: t.win_pct, reverse=True)
    return {t.abbr: t for t in ordered}


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class ESPNAdapter(ScheduleProvider):
    """ESPN NFL scoreboard provider."""

    def __init__(self, base_url: str = ESPN_API_BASE, timeout: float = ESPN_TIMEOUT):
        """
        Initialize the ESPN adapter.

        Args:
            base_url: NFL site API base URL
            timeout: HTTP request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def provider_name(self) -> str:
        return "espn"

    async def _fetch_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        GET an endpoint of the site API.

        Raises:
            SeasonDataNotFoundError: If ESPN returns 404
            PlatformError: If there's an API or network error
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(url, params=params)

                if response.status_code == 404:
                    raise SeasonDataNotFoundError(f"No ESPN data at {endpoint} ({params})")

                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                raise PlatformError(f"ESPN API error: {e}")
            except httpx.RequestError as e:
                raise PlatformError(f"Network error: {e}")

    async def fetch_season_info(self) -> Tuple[int, int]:
        """Current season and week from the scoreboard, with fallbacks."""
        try:
            data = await self._fetch_json("scoreboard")
        except PlatformError as e:
            logger.warning("Could not fetch season info, using fallback: %s", e)
            return get_current_season(), FALLBACK_WEEK

        season = data.get("season", {}).get("year")
        week = data.get("week", {}).get("number")
        if not season or not week:
            logger.warning("Scoreboard did not report season/week, using fallback")
            return get_current_season(), FALLBACK_WEEK

        return season, week

    async def _fetch_week_events(self, season: int, week: int) -> List[Dict[str, Any]]:
        data = await self._fetch_json(
            "scoreboard",
            params={"seasontype": REGULAR_SEASON, "week": week, "dates": season}
        )
        return data.get("events", [])

    def _parse_event(self, event: Dict[str, Any], week: int) -> Tuple[Optional[Game], List[Team]]:
        """
        Parse one scoreboard event.

        Returns:
            Tuple of (game or None when malformed, teams with their listed records)
        """
        competitions = event.get("competitions") or []
        if not competitions:
            return None, []
        competition = competitions[0]
        competitors = competition.get("competitors", [])

        home = next((c for c in competitors if c.get("homeAway") == "home"), None)
        away = next((c for c in competitors if c.get("homeAway") == "away"), None)
        if home is None or away is None:
            return None, []

        teams = []
        for competitor in (home, away):
            team_data = competitor.get("team", {})
            records = competitor.get("records") or []
            if not records:
                continue
            abbr = team_data.get("abbreviation", "")
            wins, losses, ties = parse_record_summary(records[0].get("summary"))
            teams.append(Team(
                id=str(team_data.get("id", abbr)),
                abbr=abbr,
                name=team_data.get("displayName", abbr),
                division=get_division(abbr) or "Unknown",
                conference=get_conference(abbr) or "Unknown",
                wins=wins,
                losses=losses,
                ties=ties
            ))

        home_records = home.get("records") or [{}]
        away_records = away.get("records") or [{}]

        game = Game(
            id=str(event.get("id")),
            week=week,
            home=home.get("team", {}).get("abbreviation", ""),
            away=away.get("team", {}).get("abbreviation", ""),
            date=_parse_date(event.get("date")),
            status=_parse_status(competition),
            home_score=_parse_score(home),
            away_score=_parse_score(away),
            home_record=home_records[0].get("summary", "0-0"),
            away_record=away_records[0].get("summary", "0-0")
        )
        return game, teams

    async def fetch_week_games(self, season: int, week: int) -> List[Game]:
        """All games of one regular-season week."""
        games = []
        for event in await self._fetch_week_events(season, week):
            game, _ = self._parse_event(event, week)
            if game is not None:
                games.append(game)
        return games

    async def fetch_standings(self, season: int, current_week: int) -> Standings:
        """
        Build standings from the records listed on each week's scoreboard.

        Later weeks overwrite earlier ones, so each team ends up with its
        latest record.
        """
        teams: Dict[str, Team] = {}

        for week in range(1, current_week + 1):
            for event in await self._fetch_week_events(season, week):
                _, event_teams = self._parse_event(event, week)
                for team in event_teams:
                    teams[team.abbr] = team

        return _order_standings(teams)

    async def fetch_remaining_games(self, season: int, current_week: int) -> List[Game]:
        """Games not yet started, from the current week through the last regular-season week."""
        remaining = []
        for week in range(current_week, REGULAR_SEASON_WEEKS + 1):
            for game in await self.fetch_week_games(season, week):
                if game.is_pending:
                    remaining.append(game)
        return remaining

    async def fetch_completed_games(self, season: int, current_week: int) -> List[Game]:
        """Final games from week 1 through the current week."""
        completed = []
        for week in range(1, current_week + 1):
            for game in await self.fetch_week_games(season, week):
                if game.is_final:
                    completed.append(game)
        return completed

    async def fetch_season(self, season: int, current_week: int) -> Tuple[Standings, List[Game], List[Game]]:
        """
        Standings, remaining games and completed games from one pass over the
        season's scoreboards, each week downloaded once.
        """
        teams: Dict[str, Team] = {}
        remaining: List[Game] = []
        completed: List[Game] = []

        for week in range(1, max(current_week, REGULAR_SEASON_WEEKS) + 1):
            for event in await self._fetch_week_events(season, week):
                game, event_teams = self._parse_event(event, week)
                if week <= current_week:
                    for team in event_teams:
                        teams[team.abbr] = team
                    if game is not None and game.is_final:
                        completed.append(game)
                if week >= current_week and game is not None and game.is_pending:
                    remaining.append(game)

        logger.info(
            "Loaded %d teams for season %d through week %d: %d remaining, %d completed games",
            len(teams), season, current_week, len(remaining), len(completed)
        )
        return _order_standings(teams), remaining, completed
