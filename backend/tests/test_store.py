"""
Tests for the in-memory session store.
"""

import pytest
from app.api.store import SessionStore
from app.platforms import LeagueData
from app.simulator import TeamNotFoundError
from factories import make_game


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def league(league_standings):
    return LeagueData(
        season=2025,
        week=14,
        standings=league_standings,
        remaining_games=[make_game("g1", "MIA", "BUF")]
    )


@pytest.fixture
def clock():
    return FakeClock()


class TestSessionStore:
    """Tests for SessionStore."""

    def test_create_and_get(self, league):
        store = SessionStore()
        stored = store.create(league, "MIA")

        assert store.get(stored.id) is stored
        assert stored.session.target == "MIA"
        assert len(store) == 1

    def test_create_unknown_team(self, league):
        """Test a failed create stores nothing."""
        store = SessionStore()
        with pytest.raises(TeamNotFoundError):
            store.create(league, "XYZ")
        assert len(store) == 0

    def test_evicts_least_recently_used(self, league, clock):
        """Test the oldest untouched session goes once the cap is reached."""
        store = SessionStore(max_sessions=2, clock=clock)
        first = store.create(league, "MIA")
        second = store.create(league, "BUF")

        clock.now += 1
        store.get(first.id)
        third = store.create(league, "KC")

        assert len(store) == 2
        assert store.get(second.id) is None
        assert store.get(first.id) is first
        assert store.get(third.id) is third

    def test_idle_sessions_expire(self, league, clock):
        """Test sessions idle past the TTL are dropped."""
        store = SessionStore(ttl_seconds=60, clock=clock)
        idle = store.create(league, "MIA")
        clock.now += 30
        active = store.create(league, "BUF")

        clock.now += 45
        assert store.get(idle.id) is None
        assert store.get(active.id) is active
        assert len(store) == 1

    def test_get_refreshes_ttl(self, league, clock):
        """Test reading a session keeps it alive."""
        store = SessionStore(ttl_seconds=60, clock=clock)
        stored = store.create(league, "MIA")

        for _ in range(3):
            clock.now += 50
            assert store.get(stored.id) is stored

    def test_delete(self, league):
        store = SessionStore()
        stored = store.create(league, "MIA")

        assert store.delete(stored.id)
        assert not store.delete(stored.id)
        assert len(store) == 0
