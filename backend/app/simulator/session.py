"""
Calculation session for one target team.

Holds the inputs of a calculation pass (standings, remaining games,
tiebreaker records) together with the user's choices: target team,
simulation mode and locked game outcomes.
"""

import logging
import random
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from .models import (
    Game,
    Standings,
    CriticalGame,
    Outcome,
    Outcomes,
    PlayoffTeam,
    MonteCarloResult,
    ScenarioSearchResult,
    TiebreakRecords,
    TeamNotFoundError,
)
from .critical import identify_critical_games
from .engine import determine_playoffs, run_monte_carlo
from .scenarios import find_best_case, find_worst_case
from ..core.config import DEFAULT_TARGET_TEAM, MONTE_CARLO_ITERATIONS


logger = logging.getLogger(__name__)


@dataclass
class CalculationResult:
    """Everything the presentation layer shows after a calculation pass."""

    target: str
    weighted: bool
    critical_games: List[CriticalGame]
    monte_carlo: MonteCarloResult
    best_case: ScenarioSearchResult
    worst_case: ScenarioSearchResult
    playoff_picture: List[PlayoffTeam]

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "weighted": self.weighted,
            "critical_games": [g.to_dict() for g in self.critical_games],
            "monte_carlo": self.monte_carlo.to_dict(),
            "best_case": self.best_case.to_dict(),
            "worst_case": self.worst_case.to_dict(),
            "playoff_picture": [t.to_dict() for t in self.playoff_picture]
        }


class PlayoffSession:
    """
    Target team, mode and locked outcomes for a series of calculation passes.

    Mutators may be called while a pass runs in another thread. A pass works
    on a snapshot taken when it starts, and its best/worst cases are only
    kept if nothing changed in the meantime.
    """

    def __init__(
        self,
        standings: Standings,
        games: List[Game],
        records: Optional[TiebreakRecords] = None,
        target: str = DEFAULT_TARGET_TEAM,
        weighted: bool = True,
        rng: Optional[random.Random] = None
    ):
        self.standings = standings
        self.games = games
        self.records = records or TiebreakRecords()
        self.weighted = weighted
        self.rng = rng or random.Random()
        self.user_outcomes: Outcomes = {}
        self.critical_games: List[CriticalGame] = []
        self.best_case: Optional[ScenarioSearchResult] = None
        self.worst_case: Optional[ScenarioSearchResult] = None
        self._lock = threading.Lock()
        # Bumped when target or locks change; a pass started at an older version is stale
        self._version = 0
        self.set_target(target)

    def _changed(self) -> None:
        self._version += 1
        self.best_case = None
        self.worst_case = None

    def set_target(self, target: str) -> None:
        """Switch target team: locked outcomes are cleared and critical games re-filtered."""
        if target not in self.standings:
            raise TeamNotFoundError(target)
        critical_games = identify_critical_games(target, self.standings, self.games)
        with self._lock:
            self.target = target
            self.user_outcomes = {}
            self.critical_games = critical_games
            self._changed()

    def set_weighted(self, weighted: bool) -> None:
        # Best/worst cases do not depend on the mode
        with self._lock:
            self.weighted = weighted

    def critical_game(self, game_id: str) -> Optional[CriticalGame]:
        return next((g for g in self.critical_games if g.id == game_id), None)

    def set_outcome(self, game_id: str, outcome: Optional[Outcome]) -> None:
        """
        Lock a critical game's outcome, or unlock it when ``outcome`` is None.

        Raises:
            KeyError: If the game is not critical for the current target
        """
        with self._lock:
            if self.critical_game(game_id) is None:
                raise KeyError(game_id)
            outcomes = dict(self.user_outcomes)
            if outcome is None:
                outcomes.pop(game_id, None)
            else:
                outcomes[game_id] = Outcome(outcome)
            self.user_outcomes = outcomes
            self._changed()

    def clear_outcomes(self) -> None:
        with self._lock:
            self.user_outcomes = {}
            self._changed()

    def apply_scenario(self, scenario: ScenarioSearchResult) -> None:
        """Lock every outcome of a best/worst case assignment."""
        with self._lock:
            self.user_outcomes = {
                game_id: outcome for game_id, outcome in scenario.outcomes.items()
                if self.critical_game(game_id) is not None
            }
            self._version += 1

    def playoff_picture(self, target: Optional[str] = None) -> List[PlayoffTeam]:
        """Current seeding for the target's conference, before any simulation."""
        conference = self.standings[target or self.target].conference
        teams = [t for t in self.standings.values() if t.conference == conference]
        return determine_playoffs(teams, self.records)

    def calculate(
        self,
        n_simulations: int = MONTE_CARLO_ITERATIONS,
        **search_kwargs
    ) -> CalculationResult:
        """Run a full pass: Monte Carlo probability plus best and worst case."""
        with self._lock:
            version = self._version
            target = self.target
            critical_games = list(self.critical_games)
            locked = dict(self.user_outcomes)
            weighted = self.weighted

        monte_carlo = run_monte_carlo(
            self.standings, critical_games, target, self.records,
            locked_outcomes=locked,
            weighted=weighted,
            n_simulations=n_simulations,
            rng=self.rng
        )
        best_case = find_best_case(
            self.standings, critical_games, target, self.records,
            locked, rng=self.rng, **search_kwargs
        )
        worst_case = find_worst_case(
            self.standings, critical_games, target, self.records,
            locked, rng=self.rng, **search_kwargs
        )

        with self._lock:
            if self._version == version:
                self.best_case = best_case
                self.worst_case = worst_case
            else:
                logger.info("Session changed during the %s pass, discarding its best/worst cases", target)

        return CalculationResult(
            target=target,
            weighted=weighted,
            critical_games=critical_games,
            monte_carlo=monte_carlo,
            best_case=best_case,
            worst_case=worst_case,
            playoff_picture=self.playoff_picture(target)
        )

    def to_dict(self) -> Dict:
        with self._lock:
            return {
                "target": self.target,
                "weighted": self.weighted,
                "user_outcomes": {gid: o.value for gid, o in self.user_outcomes.items()},
                "critical_games": [g.to_dict() for g in self.critical_games]
            }
