"""
NFL tiebreaker resolution.

Division race order (two teams tied on win percentage):
1. Head-to-head (only if the pair actually played)
2. Division record
3. Common games record
4. Conference record
5. Win percentage (unresolved ties keep their incoming order)

Division winner seeding order:
1. Conference record
2. Win percentage

Wild card groups (any size) are resolved one team at a time:
1. Head-to-head sweep (beat every other team in the group)
2. Conference record, only when uniquely best
3. First remaining team

Strength of victory and strength of schedule are not implemented, and common
games are not applied to wild card groups.
"""

from functools import cmp_to_key
from typing import Dict, List, Optional, Tuple

from .models import Team, TiebreakRecords, RecordLine


# Records are compared as floats; two teams with the same record can differ
# by rounding noise, distinct NFL records never differ by this little.
WIN_PCT_EPSILON = 0.0001

# Tolerance for sub-record comparisons (head-to-head, division, common, conference)
RECORD_PCT_EPSILON = 0.001

HEAD_TO_HEAD = "head-to-head"
DIVISION_RECORD = "division record"
COMMON_GAMES = "common games"
CONFERENCE_RECORD = "conference record"
HEAD_TO_HEAD_SWEEP = "head-to-head sweep"

# criterion -> (TiebreakRecords accessor, needs opponent)
_RECORD_LOOKUPS = {
    DIVISION_RECORD: lambda records, team, opp: records.division_record(team),
    COMMON_GAMES: lambda records, team, opp: records.common_games_record(team, opp),
    CONFERENCE_RECORD: lambda records, team, opp: records.conference_record(team),
}

Comparison = Tuple[int, Optional[str]]
Reasons = Dict[str, str]


def tied_on_win_pct(a: Team, b: Team) -> bool:
    return abs(a.win_pct - b.win_pct) < WIN_PCT_EPSILON


def _compare_pct(a_pct: float, b_pct: float, epsilon: float) -> int:
    """Negative when a ranks ahead of b, positive when b does, 0 when level."""
    if abs(a_pct - b_pct) <= epsilon:
        return 0
    return -1 if a_pct > b_pct else 1


def _compare_records(a_rec: RecordLine, b_rec: RecordLine) -> int:
    # Zero-game records are inconclusive
    if a_rec.games == 0 or b_rec.games == 0:
        return 0
    return _compare_pct(a_rec.win_pct, b_rec.win_pct, RECORD_PCT_EPSILON)


def _compare_head_to_head(a: Team, b: Team, records: TiebreakRecords) -> int:
    a_rec = records.head_to_head_record(a.abbr, b.abbr)
    if a_rec.games == 0:
        return 0
    b_rec = records.head_to_head_record(b.abbr, a.abbr)
    return _compare_pct(a_rec.win_pct, b_rec.win_pct, RECORD_PCT_EPSILON)


def _compare_on(criterion: str, a: Team, b: Team, records: TiebreakRecords) -> int:
    lookup = _RECORD_LOOKUPS[criterion]
    return _compare_records(lookup(records, a.abbr, b.abbr), lookup(records, b.abbr, a.abbr))


def compare_division_rivals(a: Team, b: Team, records: TiebreakRecords) -> Comparison:
    """
    Compare two teams from the same division.

    Returns:
        (order, criterion) where order < 0 means ``a`` ranks first and
        criterion names the tiebreaker that decided it (None for plain win
        percentage or an unresolved tie)
    """
    order = _compare_pct(a.win_pct, b.win_pct, WIN_PCT_EPSILON)
    if order:
        return order, None

    order = _compare_head_to_head(a, b, records)
    if order:
        return order, HEAD_TO_HEAD

    for criterion in (DIVISION_RECORD, COMMON_GAMES, CONFERENCE_RECORD):
        order = _compare_on(criterion, a, b, records)
        if order:
            return order, criterion

    return 0, None


def compare_division_winners(a: Team, b: Team, records: TiebreakRecords) -> Comparison:
    """Compare two division winners for seeds 1-4."""
    order = _compare_pct(a.win_pct, b.win_pct, WIN_PCT_EPSILON)
    if order:
        return order, None

    order = _compare_on(CONFERENCE_RECORD, a, b, records)
    if order:
        return order, CONFERENCE_RECORD

    return 0, None


def describe_tiebreak(
    criterion: str,
    winner: Team,
    beaten: List[Team],
    records: TiebreakRecords,
    prefix: str = "Wins tie break"
) -> str:
    """Human-readable reason ``winner`` prevailed over ``beaten`` on ``criterion``."""
    first = beaten[0]
    names = " and ".join(t.abbr for t in beaten)

    if criterion == HEAD_TO_HEAD:
        h2h = records.head_to_head_record(winner.abbr, first.abbr)
        return f"{prefix} over {names} based on head-to-head ({h2h.record_str})"

    if criterion == HEAD_TO_HEAD_SWEEP:
        return f"{prefix} over {names} based on head-to-head sweep"

    lookup = _RECORD_LOOKUPS[criterion]
    own = lookup(records, winner.abbr, first.abbr)
    if len(beaten) > 1:
        return f"{prefix} over {names} based on {criterion} ({own.record_str})"
    other = lookup(records, first.abbr, winner.abbr)
    return f"{prefix} over {names} based on {criterion} ({own.record_str} vs {other.record_str})"


def _rank_with_reasons(
    teams: List[Team],
    records: TiebreakRecords,
    compare,
    prefix: str
) -> Tuple[List[Team], Reasons]:
    ranked = sorted(teams, key=cmp_to_key(lambda a, b: compare(a, b, records)[0]))

    reasons: Reasons = {}
    for i, team in enumerate(ranked):
        beaten = [other for other in ranked[i + 1:] if tied_on_win_pct(team, other)]
        if not beaten:
            continue
        order, criterion = compare(team, beaten[0], records)
        if order < 0 and criterion:
            reasons[team.abbr] = describe_tiebreak(criterion, team, beaten, records, prefix)

    return ranked, reasons


def rank_division(teams: List[Team], records: TiebreakRecords) -> Tuple[List[Team], Reasons]:
    """
    Order a division's teams, best first.

    Returns:
        Tuple of (ranked teams, reasons by abbreviation for teams that won a tiebreaker)
    """
    return _rank_with_reasons(teams, records, compare_division_rivals, "Wins tie break")


def rank_division_winners(winners: List[Team], records: TiebreakRecords) -> Tuple[List[Team], Reasons]:
    """Order division winners into seeds 1-4."""
    return _rank_with_reasons(winners, records, compare_division_winners, "Wins seeding tie break")


def _find_sweeper(remaining: List[Team], records: TiebreakRecords) -> Optional[Team]:
    for team in remaining:
        swept = True
        for opponent in remaining:
            if opponent.abbr == team.abbr:
                continue
            h2h = records.head_to_head_record(team.abbr, opponent.abbr)
            # Didn't play, or didn't beat them
            if h2h.games == 0 or h2h.win_pct <= 0.5:
                swept = False
                break
        if swept:
            return team
    return None


def _find_best_conference_record(remaining: List[Team], records: TiebreakRecords) -> Optional[Team]:
    candidates = [t for t in remaining if records.conference_record(t.abbr).games > 0]
    if not candidates:
        return None

    best = max(candidates, key=lambda t: records.conference_record(t.abbr).win_pct)
    best_pct = records.conference_record(best.abbr).win_pct
    level = [
        t for t in candidates
        if abs(records.conference_record(t.abbr).win_pct - best_pct) <= RECORD_PCT_EPSILON
    ]
    return best if len(level) == 1 else None


def break_tie_multi_team(tied_teams: List[Team], records: TiebreakRecords) -> Tuple[List[Team], Reasons]:
    """
    Resolve a wild card group of teams tied on win percentage.

    Seats one team per round and repeats on the rest of the group.

    Args:
        tied_teams: Teams tied on win percentage, in their incoming order
        records: Season tiebreaker records

    Returns:
        Tuple of (teams in ranked order, reasons by abbreviation)
    """
    if len(tied_teams) <= 1:
        return list(tied_teams), {}

    remaining = list(tied_teams)
    seated: List[Team] = []
    reasons: Reasons = {}

    while remaining:
        if len(remaining) == 1:
            seated.append(remaining[0])
            break

        winner = _find_sweeper(remaining, records)
        criterion = HEAD_TO_HEAD_SWEEP if winner else None

        if winner is None:
            winner = _find_best_conference_record(remaining, records)
            criterion = CONFERENCE_RECORD if winner else None

        if winner is None:
            # Nothing implemented separates them: keep incoming order
            winner = remaining[0]
        else:
            others = [t for t in remaining if t.abbr != winner.abbr]
            reasons[winner.abbr] = describe_tiebreak(criterion, winner, others, records)

        seated.append(winner)
        remaining = [t for t in remaining if t.abbr != winner.abbr]

    return seated, reasons
