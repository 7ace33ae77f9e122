"""
Tests for critical game identification.
"""

import pytest
from app.simulator.critical import calculate_game_impact, identify_critical_games
from app.simulator.models import GameStatus, TeamNotFoundError
from factories import make_game


class TestIdentifyCriticalGames:
    """Tests for identify_critical_games with MIA as target (AFC East, 7-6)."""

    def ids(self, critical):
        return [c.id for c in critical]

    def test_own_game(self, league_standings):
        """Test the target's games are always critical, even against the other conference."""
        critical = identify_critical_games("MIA", league_standings, [make_game("g1", "CHI", "MIA")])

        assert self.ids(critical) == ["g1"]
        assert critical[0].impact.score == 100
        assert critical[0].impact.label == "Critical"

    def test_division_game(self, league_standings):
        """Test a game between two division teams is critical."""
        critical = identify_critical_games("MIA", league_standings, [make_game("g1", "NE", "BUF")])

        assert critical[0].impact.score == 80
        assert critical[0].impact.label == "High"

    def test_division_team_vs_conference_team(self, league_standings):
        """Test a division team against any conference team is critical."""
        critical = identify_critical_games("MIA", league_standings, [make_game("g1", "KC", "NE")])

        assert self.ids(critical) == ["g1"]
        assert critical[0].impact.score == 60

    def test_contenders(self, league_standings):
        """Test two wild card contenders outside the division is critical."""
        critical = identify_critical_games("MIA", league_standings, [make_game("g1", "PIT", "HOU")])

        assert critical[0].impact.score == 40
        assert critical[0].impact.label == "Medium"

    def test_contender_vs_non_contender_excluded(self, league_standings):
        """Test a contender against a team far from 7th place isn't critical."""
        # KC is 11-2, four wins clear of MIA in 7th
        games = [make_game("g1", "KC", "LV"), make_game("g2", "PIT", "TEN")]
        assert identify_critical_games("MIA", league_standings, games) == []

    def test_other_conference_excluded(self, league_standings):
        """Test games with no team from the target's conference are skipped."""
        critical = identify_critical_games("MIA", league_standings, [make_game("g1", "GB", "CHI")])
        assert critical == []

    def test_division_team_vs_other_conference(self, league_standings):
        """Test a division team against the other conference needs two contenders."""
        games = [
            make_game("g1", "NYJ", "DAL"),  # 5-8 and 5-8: both within 3 wins of MIA
            make_game("g2", "NE", "CHI"),   # NE is 3-10
        ]
        critical = identify_critical_games("MIA", league_standings, games)

        assert self.ids(critical) == ["g1"]
        assert critical[0].impact.score == 60

    def test_only_pending_games(self, league_standings):
        """Test final and in-progress games are never critical."""
        games = [
            make_game("g1", "MIA", "BUF", status=GameStatus.FINAL, home_score=20, away_score=17),
            make_game("g2", "MIA", "NE", status=GameStatus.IN_PROGRESS, home_score=7, away_score=0),
            make_game("g3", "NYJ", "MIA"),
        ]
        critical = identify_critical_games("MIA", league_standings, games)
        assert self.ids(critical) == ["g3"]

    def test_sorted_by_impact(self, league_standings):
        """Test games are sorted by impact, keeping schedule order among equals."""
        games = [
            make_game("g1", "PIT", "HOU", week=15),
            make_game("g2", "KC", "NE", week=15),
            make_game("g3", "BUF", "NYJ", week=15),
            make_game("g4", "IND", "BAL", week=16),
            make_game("g5", "MIA", "BUF", week=16),
            make_game("g6", "NYJ", "NE", week=17),
        ]
        critical = identify_critical_games("MIA", league_standings, games)

        assert self.ids(critical) == ["g5", "g3", "g6", "g2", "g1", "g4"]
        scores = [c.impact.score for c in critical]
        assert scores == sorted(scores, reverse=True)

    def test_unknown_target(self, league_standings):
        """Test an unknown target raises TeamNotFoundError."""
        with pytest.raises(TeamNotFoundError):
            identify_critical_games("XYZ", league_standings, [])

    def test_to_dict_includes_impact(self, league_standings):
        """Test serialized games carry their impact."""
        critical = identify_critical_games("MIA", league_standings, [make_game("g1", "MIA", "BUF")])
        data = critical[0].to_dict()

        assert data["id"] == "g1"
        assert data["impact"] == {"score": 100, "label": "Critical"}


class TestCalculateGameImpact:
    """Tests for impact scoring."""

    def test_scores(self, league_standings):
        """Test each impact tier."""
        assert calculate_game_impact(make_game("g", "MIA", "KC"), "MIA", league_standings).score == 100
        assert calculate_game_impact(make_game("g", "BUF", "NE"), "MIA", league_standings).score == 80
        assert calculate_game_impact(make_game("g", "BUF", "KC"), "MIA", league_standings).score == 60
        assert calculate_game_impact(make_game("g", "PIT", "KC"), "MIA", league_standings).score == 40
