"""
Seeding, scenario simulation and Monte Carlo playoff probability.
"""

import logging
import random
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from .models import (
    Team,
    Game,
    Standings,
    CriticalGame,
    Outcome,
    Outcomes,
    PlayoffTeam,
    ScenarioResult,
    MonteCarloResult,
    TiebreakRecords,
    TeamNotFoundError,
)
from .tiebreakers import (
    WIN_PCT_EPSILON,
    rank_division,
    rank_division_winners,
    break_tie_multi_team,
)
from ..core.config import HOME_FIELD_ADVANTAGE, MONTE_CARLO_ITERATIONS
from ..core.nfl import WILD_CARD_SPOTS


logger = logging.getLogger(__name__)


def determine_playoffs(teams: List[Team], records: TiebreakRecords) -> List[PlayoffTeam]:
    """
    Seed one conference.

    Args:
        teams: Every team in a single conference
        records: Season tiebreaker records

    Returns:
        Playoff teams in seed order: division winners (1-4) then wild cards (5-7)
    """
    # Group teams by division, keeping input order
    divisions: Dict[str, List[Team]] = defaultdict(list)
    for team in teams:
        divisions[team.division].append(team)

    reasons: Dict[str, str] = {}
    division_winners = []
    for div_teams in divisions.values():
        ranked, div_reasons = rank_division(div_teams, records)
        division_winners.append(ranked[0])
        # Kept for losers too; a wild card tiebreak overwrites them below
        reasons.update(div_reasons)

    division_winners, seeding_reasons = rank_division_winners(division_winners, records)
    for abbr, reason in seeding_reasons.items():
        reasons.setdefault(abbr, reason)

    winner_abbrs = {t.abbr for t in division_winners}
    pool = [t for t in teams if t.abbr not in winner_abbrs]
    pool.sort(key=lambda t: t.win_pct, reverse=True)

    # Resolve runs of teams tied on win percentage
    wild_card_order: List[Team] = []
    i = 0
    while i < len(pool):
        current_pct = pool[i].win_pct
        tied_group = [pool[i]]
        for other in pool[i + 1:]:
            if abs(other.win_pct - current_pct) < WIN_PCT_EPSILON:
                tied_group.append(other)
            else:
                break

        if len(tied_group) > 1:
            tied_group, group_reasons = break_tie_multi_team(tied_group, records)
            reasons.update(group_reasons)

        wild_card_order.extend(tied_group)
        i += len(tied_group)

    wild_cards = wild_card_order[:WILD_CARD_SPOTS]

    playoff_teams = []
    for seed, team in enumerate(division_winners + wild_cards, start=1):
        playoff_teams.append(PlayoffTeam(
            team=team,
            seed=seed,
            is_division_winner=team.abbr in winner_abbrs,
            is_wild_card=team.abbr not in winner_abbrs,
            tiebreak_reason=reasons.get(team.abbr)
        ))

    return playoff_teams


def seed_league(standings: Standings, records: TiebreakRecords) -> Dict[str, List[PlayoffTeam]]:
    """Playoff picture for every conference present in the standings."""
    conferences: Dict[str, List[Team]] = defaultdict(list)
    for team in standings.values():
        conferences[team.conference].append(team)
    return {
        conference: determine_playoffs(teams, records)
        for conference, teams in sorted(conferences.items())
    }


def apply_outcomes(
    standings: Standings,
    critical_games: List[CriticalGame],
    outcomes: Outcomes
) -> Standings:
    """
    Apply a set of outcomes to a copy of the standings.

    Games without an outcome are left unplayed. Teams missing from the
    standings are skipped.

    Returns:
        Updated copies of every team, keyed by abbreviation
    """
    sim_standings = {abbr: t.copy() for abbr, t in standings.items()}

    for critical in critical_games:
        outcome = outcomes.get(critical.id)
        if outcome is None:
            continue

        game = critical.game
        winner_abbr = game.team_for(outcome)
        loser_abbr = game.away if winner_abbr == game.home else game.home

        winner = sim_standings.get(winner_abbr)
        loser = sim_standings.get(loser_abbr)
        if winner is not None:
            winner.wins += 1
        else:
            logger.debug("No standings entry for %s in game %s", winner_abbr, game.id)
        if loser is not None:
            loser.losses += 1
        else:
            logger.debug("No standings entry for %s in game %s", loser_abbr, game.id)

    return sim_standings


def _win_loss_key(team: Team):
    return (-team.wins, team.losses)


def simulate_scenario(
    standings: Standings,
    critical_games: List[CriticalGame],
    outcomes: Outcomes,
    target: str,
    records: TiebreakRecords
) -> ScenarioResult:
    """
    Play out one outcome assignment and report the target team's fate.

    Division and wild card ranks are plain win/loss orderings (most wins,
    then fewest losses), not the tiebreaker cascade; they only measure how
    close a miss was.

    Raises:
        TeamNotFoundError: If the target is not in the standings
    """
    if target not in standings:
        raise TeamNotFoundError(target)

    sim_standings = apply_outcomes(standings, critical_games, outcomes)
    target_team = sim_standings[target]

    conference_teams = [t for t in sim_standings.values() if t.conference == target_team.conference]
    playoff_teams = determine_playoffs(conference_teams, records)

    seed = next((p.seed for p in playoff_teams if p.abbr == target), None)

    division_teams = sorted(
        (t for t in sim_standings.values() if t.division == target_team.division),
        key=_win_loss_key
    )
    division_rank = [t.abbr for t in division_teams].index(target) + 1

    winner_abbrs = {p.abbr for p in playoff_teams if p.is_division_winner}
    wild_card_pool = sorted(
        (t for t in conference_teams if t.abbr not in winner_abbrs),
        key=_win_loss_key
    )
    pool_abbrs = [t.abbr for t in wild_card_pool]
    wildcard_rank = pool_abbrs.index(target) + 1 if target in pool_abbrs else None

    return ScenarioResult(
        standings=sim_standings,
        playoff_teams=playoff_teams,
        made_playoffs=seed is not None,
        seed=seed,
        division_rank=division_rank,
        wildcard_rank=wildcard_rank
    )


def home_win_probability(
    game: Game,
    standings: Standings,
    home_field_advantage: float = HOME_FIELD_ADVANTAGE
) -> float:
    """
    Weighted-mode chance the home team wins.

    home_pct / (home_pct + away_pct) plus a home field bonus. A simple
    heuristic, not a calibrated model. Unknown teams or two winless teams
    fall back to a coin flip plus the bonus.
    """
    home = standings.get(game.home)
    away = standings.get(game.away)
    if home is None or away is None:
        return 0.5 + home_field_advantage

    total_weight = home.win_pct + away.win_pct
    if total_weight <= 0:
        return 0.5 + home_field_advantage
    return home.win_pct / total_weight + home_field_advantage


def sample_outcome(
    game: Game,
    standings: Standings,
    weighted: bool,
    rng: random.Random,
    home_field_advantage: float = HOME_FIELD_ADVANTAGE
) -> Outcome:
    """Draw a winner for an undecided game."""
    if weighted:
        home_prob = home_win_probability(game, standings, home_field_advantage)
    else:
        home_prob = 0.5
    return Outcome.HOME if rng.random() < home_prob else Outcome.AWAY


def run_monte_carlo(
    standings: Standings,
    critical_games: List[CriticalGame],
    target: str,
    records: TiebreakRecords,
    locked_outcomes: Optional[Outcomes] = None,
    weighted: bool = True,
    n_simulations: int = MONTE_CARLO_ITERATIONS,
    rng: Optional[random.Random] = None,
    progress_callback: Optional[Callable[[float], None]] = None
) -> MonteCarloResult:
    """
    Estimate the target team's playoff probability.

    Each trial keeps the locked outcomes and samples every other critical game.

    Args:
        standings: Current standings keyed by abbreviation
        critical_games: Games that can affect the target
        target: Target team abbreviation
        records: Season tiebreaker records
        locked_outcomes: Outcomes fixed by the user
        weighted: Sample by win percentage instead of coin flips
        n_simulations: Number of trials
        rng: Random source (defaults to a fresh ``random.Random``)
        progress_callback: Optional callback for progress updates (receives percent complete)

    Returns:
        MonteCarloResult with probability (0-100) and seed distribution
    """
    rng = rng or random.Random()
    locked_outcomes = locked_outcomes or {}

    undecided = [g for g in critical_games if g.id not in locked_outcomes]
    playoff_count = 0
    seed_counts: Dict[int, int] = defaultdict(int)

    for sim_idx in range(n_simulations):
        if progress_callback and sim_idx % 100 == 0:
            progress_callback(sim_idx / n_simulations * 100)

        outcomes = dict(locked_outcomes)
        for critical in undecided:
            outcomes[critical.id] = sample_outcome(critical.game, standings, weighted, rng)

        result = simulate_scenario(standings, critical_games, outcomes, target, records)
        if result.made_playoffs:
            playoff_count += 1
            seed_counts[result.seed] += 1

    if progress_callback:
        progress_callback(100)

    probability = playoff_count / n_simulations * 100 if n_simulations else 0.0
    logger.info(
        "Monte Carlo for %s: %.1f%% over %d trials (%s)",
        target, probability, n_simulations, "weighted" if weighted else "random"
    )

    return MonteCarloResult(
        playoff_probability=probability,
        playoff_count=playoff_count,
        total_iterations=n_simulations,
        seed_counts=dict(sorted(seed_counts.items()))
    )
