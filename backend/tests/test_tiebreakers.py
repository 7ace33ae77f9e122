"""
Tests for NFL tiebreaker resolution.
"""

from app.simulator.models import RecordLine, TiebreakRecords
from app.simulator.tiebreakers import (
    COMMON_GAMES,
    CONFERENCE_RECORD,
    DIVISION_RECORD,
    HEAD_TO_HEAD,
    break_tie_multi_team,
    compare_division_rivals,
    compare_division_winners,
    describe_tiebreak,
    rank_division,
    rank_division_winners,
    tied_on_win_pct,
)
from factories import make_team


def h2h(**pairs):
    """Build head-to-head records from keyword pairs like KC_LAC=(2, 0)."""
    records = {}
    for key, (wins, losses) in pairs.items():
        team, opponent = key.split("_")
        records[(team, opponent)] = RecordLine(wins=wins, losses=losses)
        records[(opponent, team)] = RecordLine(wins=losses, losses=wins)
    return records


class TestCompareDivisionRivals:
    """Tests for the two-team division cascade."""

    def test_win_pct_decides_first(self):
        """Test a better record wins before any tiebreaker."""
        kc = make_team("KC", 10, 3)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(head_to_head=h2h(LAC_KC=(2, 0)))

        assert compare_division_rivals(kc, lac, records) == (-1, None)
        assert compare_division_rivals(lac, kc, records) == (1, None)

    def test_head_to_head(self):
        """Test head-to-head breaks a tie on win percentage."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(head_to_head=h2h(LAC_KC=(2, 0)))

        assert compare_division_rivals(lac, kc, records) == (-1, HEAD_TO_HEAD)
        assert compare_division_rivals(kc, lac, records) == (1, HEAD_TO_HEAD)

    def test_head_to_head_beats_better_division_record(self):
        """Test head-to-head outranks every later criterion."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(
            head_to_head=h2h(LAC_KC=(2, 0)),
            division={"KC": RecordLine(4, 0), "LAC": RecordLine(2, 2)},
            conference={"KC": RecordLine(9, 0), "LAC": RecordLine(5, 4)},
        )

        order, criterion = compare_division_rivals(lac, kc, records)
        assert order < 0
        assert criterion == HEAD_TO_HEAD

    def test_split_series_falls_through(self):
        """Test a 1-1 split moves on to division record."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(
            head_to_head=h2h(KC_LAC=(1, 1)),
            division={"KC": RecordLine(3, 2), "LAC": RecordLine(4, 1)},
        )

        assert compare_division_rivals(lac, kc, records) == (-1, DIVISION_RECORD)

    def test_unplayed_falls_through(self):
        """Test teams that haven't met go straight to division record."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(division={"KC": RecordLine(4, 1), "LAC": RecordLine(3, 2)})

        assert compare_division_rivals(kc, lac, records) == (-1, DIVISION_RECORD)

    def test_common_games(self):
        """Test common games decide when division records are level."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(
            division={"KC": RecordLine(3, 2), "LAC": RecordLine(3, 2)},
            common_games={("KC", "LAC"): RecordLine(3, 2), ("LAC", "KC"): RecordLine(4, 1)},
        )

        assert compare_division_rivals(kc, lac, records) == (1, COMMON_GAMES)

    def test_conference_record(self):
        """Test conference record is the last criterion."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(conference={"KC": RecordLine(7, 3), "LAC": RecordLine(6, 4)})

        assert compare_division_rivals(kc, lac, records) == (-1, CONFERENCE_RECORD)

    def test_zero_game_record_is_inconclusive(self):
        """Test a criterion with no games on one side is skipped."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(
            division={"LAC": RecordLine(4, 1)},
            conference={"KC": RecordLine(7, 3), "LAC": RecordLine(6, 4)},
        )

        assert compare_division_rivals(kc, lac, records) == (-1, CONFERENCE_RECORD)

    def test_unresolved(self):
        """Test identical teams with no records stay tied."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        assert compare_division_rivals(kc, lac, TiebreakRecords()) == (0, None)

    def test_ties_count_half(self):
        """Test win percentage counts ties as half a win."""
        kc = make_team("KC", 9, 3, 1)
        lac = make_team("LAC", 9, 4, 0)
        assert not tied_on_win_pct(kc, lac)
        assert compare_division_rivals(kc, lac, TiebreakRecords()) == (-1, None)


class TestCompareDivisionWinners:
    """Tests for division winner seeding."""

    def test_conference_record(self):
        """Test conference record orders tied division winners."""
        kc = make_team("KC", 11, 2)
        buf = make_team("BUF", 11, 2)
        records = TiebreakRecords(conference={"KC": RecordLine(8, 2), "BUF": RecordLine(9, 1)})

        assert compare_division_winners(buf, kc, records) == (-1, CONFERENCE_RECORD)

    def test_head_to_head_ignored(self):
        """Test seeding between division winners doesn't use head-to-head."""
        kc = make_team("KC", 11, 2)
        buf = make_team("BUF", 11, 2)
        records = TiebreakRecords(head_to_head=h2h(KC_BUF=(1, 0)))

        assert compare_division_winners(kc, buf, records) == (0, None)


class TestRankDivision:
    """Tests for ranking a division."""

    def test_orders_by_win_pct(self, afc_standings):
        """Test a division without ties is ordered by record."""
        west = [afc_standings[a] for a in ("LV", "DEN", "KC", "LAC")]
        ranked, reasons = rank_division(west, TiebreakRecords())

        assert [t.abbr for t in ranked] == ["KC", "LAC", "DEN", "LV"]
        assert reasons == {}

    def test_reason_for_tiebreak_winner(self):
        """Test the winner of a tiebreaker gets a reason."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(head_to_head=h2h(LAC_KC=(2, 0)))

        ranked, reasons = rank_division([kc, lac], records)

        assert [t.abbr for t in ranked] == ["LAC", "KC"]
        assert reasons == {"LAC": "Wins tie break over KC based on head-to-head (2-0)"}

    def test_unresolved_keeps_input_order(self):
        """Test an unbreakable tie keeps the incoming order."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)

        ranked, reasons = rank_division([lac, kc], TiebreakRecords())
        assert [t.abbr for t in ranked] == ["LAC", "KC"]
        assert reasons == {}

    def test_division_winner_seeding_reason(self):
        """Test seeding tiebreaks use their own prefix."""
        kc = make_team("KC", 11, 2)
        buf = make_team("BUF", 11, 2)
        records = TiebreakRecords(conference={"KC": RecordLine(8, 2), "BUF": RecordLine(9, 1)})

        ranked, reasons = rank_division_winners([kc, buf], records)

        assert [t.abbr for t in ranked] == ["BUF", "KC"]
        assert reasons["BUF"] == "Wins seeding tie break over KC based on conference record (9-1 vs 8-2)"


class TestBreakTieMultiTeam:
    """Tests for wild card group resolution."""

    def test_single_team(self):
        """Test a group of one is returned unchanged."""
        pit = make_team("PIT", 9, 4)
        assert break_tie_multi_team([pit], TiebreakRecords()) == ([pit], {})

    def test_head_to_head_sweep(self):
        """Test a team that beat everyone in the group is seated first."""
        pit = make_team("PIT", 9, 4)
        lac = make_team("LAC", 9, 4)
        mia = make_team("MIA", 9, 4)
        records = TiebreakRecords(head_to_head=h2h(MIA_PIT=(1, 0), MIA_LAC=(1, 0), LAC_PIT=(1, 0)))

        seated, reasons = break_tie_multi_team([pit, lac, mia], records)

        assert [t.abbr for t in seated] == ["MIA", "LAC", "PIT"]
        assert reasons["MIA"] == "Wins tie break over PIT and LAC based on head-to-head sweep"
        assert reasons["LAC"] == "Wins tie break over PIT based on head-to-head sweep"

    def test_sweep_requires_playing_everyone(self):
        """Test a team that didn't play every other team can't sweep."""
        pit = make_team("PIT", 9, 4)
        lac = make_team("LAC", 9, 4)
        mia = make_team("MIA", 9, 4)
        records = TiebreakRecords(
            head_to_head=h2h(MIA_PIT=(1, 0)),
            conference={"PIT": RecordLine(8, 3), "LAC": RecordLine(7, 4), "MIA": RecordLine(6, 5)},
        )

        seated, reasons = break_tie_multi_team([mia, lac, pit], records)

        assert seated[0].abbr == "PIT"
        assert "conference record" in reasons["PIT"]

    def test_unique_conference_record(self):
        """Test the uniquely best conference record is seated first."""
        pit = make_team("PIT", 9, 4)
        lac = make_team("LAC", 9, 4)
        mia = make_team("MIA", 9, 4)
        records = TiebreakRecords(
            conference={"PIT": RecordLine(6, 4), "LAC": RecordLine(7, 3), "MIA": RecordLine(5, 5)}
        )

        seated, reasons = break_tie_multi_team([pit, lac, mia], records)

        assert [t.abbr for t in seated] == ["LAC", "PIT", "MIA"]
        assert reasons["LAC"] == "Wins tie break over PIT and MIA based on conference record (7-3)"
        assert reasons["PIT"] == "Wins tie break over MIA based on conference record (6-4 vs 5-5)"

    def test_shared_best_conference_record_unresolved(self):
        """Test a shared best conference record doesn't seat anyone."""
        pit = make_team("PIT", 9, 4)
        lac = make_team("LAC", 9, 4)
        mia = make_team("MIA", 9, 4)
        records = TiebreakRecords(
            conference={"PIT": RecordLine(7, 3), "LAC": RecordLine(7, 3), "MIA": RecordLine(5, 5)}
        )

        seated, reasons = break_tie_multi_team([mia, pit, lac], records)

        assert seated[0].abbr == "MIA"
        assert "MIA" not in reasons

    def test_no_records_keeps_input_order(self):
        """Test a group with no tiebreaker data keeps its incoming order."""
        teams = [make_team(a, 9, 4) for a in ("MIA", "PIT", "LAC", "IND")]

        seated, reasons = break_tie_multi_team(teams, TiebreakRecords())

        assert [t.abbr for t in seated] == ["MIA", "PIT", "LAC", "IND"]
        assert reasons == {}

    def test_two_team_group(self):
        """Test a two-team wild card tie uses the same procedure."""
        pit = make_team("PIT", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(head_to_head=h2h(LAC_PIT=(1, 0)))

        seated, reasons = break_tie_multi_team([pit, lac], records)

        assert [t.abbr for t in seated] == ["LAC", "PIT"]
        assert reasons["LAC"] == "Wins tie break over PIT based on head-to-head sweep"


class TestDescribeTiebreak:
    """Tests for tiebreak reason text."""

    def test_record_comparison(self):
        """Test a two-team reason shows both records."""
        kc = make_team("KC", 9, 4)
        lac = make_team("LAC", 9, 4)
        records = TiebreakRecords(division={"KC": RecordLine(4, 1), "LAC": RecordLine(3, 2)})

        text = describe_tiebreak(DIVISION_RECORD, kc, [lac], records)
        assert text == "Wins tie break over LAC based on division record (4-1 vs 3-2)"
