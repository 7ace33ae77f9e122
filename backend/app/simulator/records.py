"""
Tiebreaker records derived from completed games.

Builds the four aggregates the seeding resolver consults when teams are tied
on win percentage:

1. Conference record (games between two teams of the same conference)
2. Division record (games between two teams of the same division)
3. Common games record (same-division pairs vs opponents both have played)
4. Head-to-head record (direct matchups)
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Game, RecordLine, Standings, TiebreakRecords
from ..core.nfl import get_conference, get_division


logger = logging.getLogger(__name__)


def _results_for(game: Game) -> Tuple[str, str]:
    """Return (home result, away result) as 'W'/'L'/'T'."""
    winner = game.winner
    if winner is None:
        return "T", "T"
    if winner == game.home:
        return "W", "L"
    return "L", "W"


def build_tiebreak_records(
    games: Iterable[Game],
    teams: Optional[Standings] = None
) -> TiebreakRecords:
    """
    Compute tiebreaker records from the season's completed games.

    Division and conference membership come from ``teams`` when given and
    fall back to the league map. Games involving an abbreviation that can't be
    placed still count head-to-head but are skipped for conference, division
    and common-games purposes.

    Args:
        games: Games for the season; anything not final is ignored
        teams: Optional standings keyed by abbreviation

    Returns:
        TiebreakRecords for the season
    """
    teams = teams or {}

    def division_of(abbr: str) -> Optional[str]:
        team = teams.get(abbr)
        return team.division if team else get_division(abbr)

    def conference_of(abbr: str) -> Optional[str]:
        team = teams.get(abbr)
        return team.conference if team else get_conference(abbr)

    conference: Dict[str, RecordLine] = defaultdict(RecordLine)
    division: Dict[str, RecordLine] = defaultdict(RecordLine)
    head_to_head: Dict[Tuple[str, str], RecordLine] = defaultdict(RecordLine)

    # team -> [(opponent, result)] for common games
    results_by_team: Dict[str, List[Tuple[str, str]]] = defaultdict(list)

    for game in games:
        if not game.is_final:
            continue
        if game.home_score is None or game.away_score is None:
            # Final without a score, e.g. a cancelled game
            logger.debug("Skipping scoreless final %s @ %s (%s)", game.away, game.home, game.id)
            continue

        home_result, away_result = _results_for(game)

        head_to_head[(game.home, game.away)].add(home_result)
        head_to_head[(game.away, game.home)].add(away_result)
        results_by_team[game.home].append((game.away, home_result))
        results_by_team[game.away].append((game.home, away_result))

        home_conf, away_conf = conference_of(game.home), conference_of(game.away)
        if home_conf is None or away_conf is None:
            logger.debug(
                "Skipping conference/division records for %s: unknown team in %s @ %s",
                game.id, game.away, game.home
            )
            continue

        if home_conf == away_conf:
            conference[game.home].add(home_result)
            conference[game.away].add(away_result)

        if division_of(game.home) == division_of(game.away):
            division[game.home].add(home_result)
            division[game.away].add(away_result)

    common_games = _build_common_games(results_by_team, division_of)

    return TiebreakRecords(
        conference=dict(conference),
        division=dict(division),
        common_games=common_games,
        head_to_head=dict(head_to_head)
    )


def _build_common_games(
    results_by_team: Dict[str, List[Tuple[str, str]]],
    division_of
) -> Dict[Tuple[str, str], RecordLine]:
    """Record of each team vs the opponents it shares with each division rival."""
    by_division: Dict[str, List[str]] = defaultdict(list)
    for abbr in results_by_team:
        div = division_of(abbr)
        if div is not None:
            by_division[div].append(abbr)

    common_games: Dict[Tuple[str, str], RecordLine] = {}

    for members in by_division.values():
        for team in members:
            for rival in members:
                if team == rival:
                    continue

                team_opponents = {opp for opp, _ in results_by_team[team] if opp != rival}
                rival_opponents = {opp for opp, _ in results_by_team[rival] if opp != team}
                shared = team_opponents & rival_opponents
                if not shared:
                    continue

                record = RecordLine()
                for opponent, result in results_by_team[team]:
                    if opponent in shared:
                        record.add(result)
                common_games[(team, rival)] = record

    return common_games
