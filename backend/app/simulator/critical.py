"""
Critical game identification.

Narrows the remaining schedule to the games whose outcome can move the
target team's seeding, and scores each by how directly it matters.
"""

from typing import List

from .models import Game, GameImpact, CriticalGame, Standings, TeamNotFoundError
from ..core.nfl import PLAYOFF_SPOTS


# Teams within this many wins of the conference's 7th place team are contenders
CONTENDER_WIN_WINDOW = 3

CRITICAL = GameImpact(score=100, label="Critical")
HIGH = GameImpact(score=80, label="High")
MEDIUM_DIVISION = GameImpact(score=60, label="Medium")
MEDIUM_CONTENDERS = GameImpact(score=40, label="Medium")


def calculate_game_impact(game: Game, target: str, standings: Standings) -> GameImpact:
    """Impact of a game relative to the target team."""
    if game.involves(target):
        return CRITICAL

    target_division = standings[target].division
    home = standings.get(game.home)
    away = standings.get(game.away)
    home_in_division = home is not None and home.division == target_division
    away_in_division = away is not None and away.division == target_division

    if home_in_division and away_in_division:
        return HIGH
    if home_in_division or away_in_division:
        return MEDIUM_DIVISION
    return MEDIUM_CONTENDERS


def identify_critical_games(target: str, standings: Standings, games: List[Game]) -> List[CriticalGame]:
    """
    Select the remaining games that matter to the target team.

    Kept, in priority order:
    1. The target's own games
    2. Games between two division teams
    3. A division team against a conference team
    4. Two wild card contenders, within 3 wins of the conference's 7th place team

    Games with no team from the target's conference are never kept.

    Args:
        target: Target team abbreviation
        standings: League standings keyed by abbreviation
        games: All remaining games

    Returns:
        Critical games, highest impact first (ties keep schedule order)

    Raises:
        TeamNotFoundError: If the target is not in the standings
    """
    if target not in standings:
        raise TeamNotFoundError(target)

    target_team = standings[target]
    conference_abbrs = {t.abbr for t in standings.values() if t.conference == target_team.conference}
    division_abbrs = {t.abbr for t in standings.values() if t.division == target_team.division}

    conference_table = sorted(
        (t for t in standings.values() if t.conference == target_team.conference),
        key=lambda t: t.win_pct,
        reverse=True
    )
    seventh_place = conference_table[PLAYOFF_SPOTS - 1] if len(conference_table) >= PLAYOFF_SPOTS else None

    def in_contention(abbr: str) -> bool:
        team = standings.get(abbr)
        if team is None or seventh_place is None:
            return False
        return abs(team.wins - seventh_place.wins) <= CONTENDER_WIN_WINDOW

    critical = []
    for game in games:
        # Completed and in-progress games are never simulated
        if not game.is_pending:
            continue

        home_in_conference = game.home in conference_abbrs
        away_in_conference = game.away in conference_abbrs
        if not home_in_conference and not away_in_conference:
            continue

        home_in_division = game.home in division_abbrs
        away_in_division = game.away in division_abbrs

        keep = (
            game.involves(target)
            or (home_in_division and away_in_division)
            or (home_in_division and away_in_conference)
            or (away_in_division and home_in_conference)
            or (in_contention(game.home) and in_contention(game.away))
        )
        if keep:
            critical.append(CriticalGame(
                game=game,
                impact=calculate_game_impact(game, target, standings)
            ))

    # sort is stable, so equal scores keep schedule order
    critical.sort(key=lambda c: c.impact.score, reverse=True)
    return critical
