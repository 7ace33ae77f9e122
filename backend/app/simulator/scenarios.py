"""
Best and worst case scenario search.

Finds the assignment of undecided critical games that is most (or least)
favorable to the target team. With few undecided games every combination is
enumerated; beyond that, biased random sampling is used, which gives a good
answer but not a guaranteed optimum.
"""

import logging
import random
from typing import Callable, List, Optional, Set, Tuple

from .models import (
    CriticalGame,
    DecidedGame,
    Outcome,
    Outcomes,
    ScenarioResult,
    ScenarioSearchResult,
    Standings,
    TiebreakRecords,
    TeamNotFoundError,
)
from .engine import simulate_scenario
from ..core.config import (
    MAX_EXHAUSTIVE_GAMES,
    HEURISTIC_PRIMARY_TRIALS,
    HEURISTIC_SECONDARY_TRIALS,
)


logger = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[float], None]]


def scenario_rank(result: ScenarioResult) -> Tuple:
    """
    Sort key for how good a scenario is for the target, lower is better.

    Making the playoffs beats missing; among playoff finishes a lower seed is
    better; among misses the wild card rank, then the division rank, decides.
    """
    if result.made_playoffs:
        return (0, result.seed)
    return (1, result.wildcard_rank or 0, result.division_rank)


def _games_set(critical_games: List[CriticalGame], outcomes: Outcomes) -> List[DecidedGame]:
    decided = []
    for critical in critical_games:
        outcome = outcomes.get(critical.id)
        if outcome is not None:
            decided.append(DecidedGame(
                game=critical,
                outcome=outcome,
                winner=critical.game.team_for(outcome)
            ))
    return decided


def _exhaustive_search(
    standings: Standings,
    critical_games: List[CriticalGame],
    undecided: List[CriticalGame],
    target: str,
    records: TiebreakRecords,
    locked_outcomes: Outcomes,
    find_best: bool,
    progress_callback: ProgressCallback = None
) -> Tuple[Outcomes, ScenarioResult]:
    best_outcomes = None
    best_result = None
    best_key = None
    n_games = len(undecided)
    total_outcomes = 2 ** n_games

    for outcome_idx in range(total_outcomes):
        if progress_callback and outcome_idx % 1000 == 0:
            progress_callback(outcome_idx / total_outcomes * 100)

        outcomes = dict(locked_outcomes)
        for game_idx, critical in enumerate(undecided):
            bit = (outcome_idx >> game_idx) & 1
            outcomes[critical.id] = Outcome.HOME if bit == 0 else Outcome.AWAY

        result = simulate_scenario(standings, critical_games, outcomes, target, records)
        key = scenario_rank(result)

        if best_key is None or (key < best_key if find_best else key > best_key):
            best_key = key
            best_result = result
            best_outcomes = outcomes

    return best_outcomes, best_result


def _biased_outcomes(
    undecided: List[CriticalGame],
    target: str,
    rivals: Set[str],
    favorable: bool,
    push_rivals: bool,
    rng: random.Random
) -> Outcomes:
    """
    Outcomes where the target wins (or loses) all its games.

    With ``push_rivals`` division rivals lose (or win) their games; every
    other game is a coin flip.
    """
    outcomes: Outcomes = {}
    for critical in undecided:
        game = critical.game
        if game.involves(target):
            target_side = game.outcome_for(target)
            other_side = Outcome.AWAY if target_side == Outcome.HOME else Outcome.HOME
            outcomes[game.id] = target_side if favorable else other_side
        elif push_rivals and game.home in rivals:
            outcomes[game.id] = Outcome.AWAY if favorable else Outcome.HOME
        elif push_rivals and game.away in rivals:
            outcomes[game.id] = Outcome.HOME if favorable else Outcome.AWAY
        else:
            outcomes[game.id] = Outcome.HOME if rng.random() < 0.5 else Outcome.AWAY
    return outcomes


def _heuristic_search(
    standings: Standings,
    critical_games: List[CriticalGame],
    undecided: List[CriticalGame],
    target: str,
    records: TiebreakRecords,
    locked_outcomes: Outcomes,
    find_best: bool,
    primary_trials: int,
    secondary_trials: int,
    rng: random.Random,
    progress_callback: ProgressCallback = None
) -> Tuple[Outcomes, ScenarioResult]:
    division = standings[target].division
    rivals = {t.abbr for t in standings.values() if t.division == division and t.abbr != target}

    # (trials, push division rivals)
    strategies = [(primary_trials, True), (secondary_trials, False)]
    total_trials = max(primary_trials + secondary_trials, 1)

    best_outcomes = None
    best_result = None
    best_key = None
    done = 0

    for trials, push_rivals in strategies:
        for _ in range(trials):
            if progress_callback and done % 500 == 0:
                progress_callback(done / total_trials * 100)
            done += 1

            outcomes = dict(locked_outcomes)
            outcomes.update(_biased_outcomes(undecided, target, rivals, find_best, push_rivals, rng))

            result = simulate_scenario(standings, critical_games, outcomes, target, records)
            key = scenario_rank(result)

            if best_key is None or (key < best_key if find_best else key > best_key):
                best_key = key
                best_result = result
                best_outcomes = outcomes

    if best_result is None:
        # No trials requested: report the target-biased assignment once
        best_outcomes = dict(locked_outcomes)
        best_outcomes.update(_biased_outcomes(undecided, target, rivals, find_best, True, rng))
        best_result = simulate_scenario(standings, critical_games, best_outcomes, target, records)

    return best_outcomes, best_result


def find_scenario(
    standings: Standings,
    critical_games: List[CriticalGame],
    target: str,
    records: TiebreakRecords,
    locked_outcomes: Optional[Outcomes] = None,
    find_best: bool = True,
    max_exhaustive: int = MAX_EXHAUSTIVE_GAMES,
    primary_trials: int = HEURISTIC_PRIMARY_TRIALS,
    secondary_trials: int = HEURISTIC_SECONDARY_TRIALS,
    rng: Optional[random.Random] = None,
    progress_callback: ProgressCallback = None
) -> ScenarioSearchResult:
    """
    Search for the best or worst outcome assignment for the target team.

    Locked outcomes are copied into every candidate and never changed.

    Args:
        standings: Current standings keyed by abbreviation
        critical_games: Games that can affect the target
        target: Target team abbreviation
        records: Season tiebreaker records
        locked_outcomes: Outcomes fixed by the user
        find_best: True for the best case, False for the worst case
        max_exhaustive: Largest undecided game count searched exhaustively
        primary_trials: Heuristic trials that also push division rivals
        secondary_trials: Heuristic trials with every other game random
        rng: Random source for the heuristic search
        progress_callback: Optional callback for progress updates

    Returns:
        ScenarioSearchResult with the assignment, its result and the games it sets
    """
    if target not in standings:
        raise TeamNotFoundError(target)

    locked_outcomes = dict(locked_outcomes or {})
    undecided = [g for g in critical_games if g.id not in locked_outcomes]
    exhaustive = len(undecided) <= max_exhaustive

    logger.debug(
        "%s case search for %s: %d undecided games, %s",
        "Best" if find_best else "Worst", target, len(undecided),
        "exhaustive" if exhaustive else "heuristic"
    )

    if exhaustive:
        outcomes, result = _exhaustive_search(
            standings, critical_games, undecided, target, records,
            locked_outcomes, find_best, progress_callback
        )
    else:
        outcomes, result = _heuristic_search(
            standings, critical_games, undecided, target, records,
            locked_outcomes, find_best, primary_trials, secondary_trials,
            rng or random.Random(), progress_callback
        )

    if progress_callback:
        progress_callback(100)

    return ScenarioSearchResult(
        outcomes=outcomes,
        result=result,
        games_set=_games_set(critical_games, outcomes),
        exhaustive=exhaustive
    )


def find_best_case(
    standings: Standings,
    critical_games: List[CriticalGame],
    target: str,
    records: TiebreakRecords,
    locked_outcomes: Optional[Outcomes] = None,
    **kwargs
) -> ScenarioSearchResult:
    """Most favorable assignment for the target. See ``find_scenario``."""
    return find_scenario(standings, critical_games, target, records, locked_outcomes, find_best=True, **kwargs)


def find_worst_case(
    standings: Standings,
    critical_games: List[CriticalGame],
    target: str,
    records: TiebreakRecords,
    locked_outcomes: Optional[Outcomes] = None,
    **kwargs
) -> ScenarioSearchResult:
    """Least favorable assignment for the target. See ``find_scenario``."""
    return find_scenario(standings, critical_games, target, records, locked_outcomes, find_best=False, **kwargs)
