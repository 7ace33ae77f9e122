"""
In-memory session store.

Sessions live only as long as the process; computed scenarios are never
persisted. The store is bounded: the least recently used session is evicted
once MAX_SESSIONS is reached, and sessions idle for SESSION_TTL_SECONDS
expire.
"""

import logging
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..core.config import MAX_SESSIONS, SESSION_TTL_SECONDS
from ..platforms import LeagueData, ScheduleProvider, get_adapter
from ..simulator import PlayoffSession


logger = logging.getLogger(__name__)


@dataclass
class StoredSession:
    """A session and the league snapshot it was created from."""

    id: str
    session: PlayoffSession
    league: LeagueData
    last_used: float = field(default=0.0)


class SessionStore:
    """Keeps calculation sessions by id, most recently used last."""

    def __init__(
        self,
        max_sessions: int = MAX_SESSIONS,
        ttl_seconds: float = SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: "OrderedDict[str, StoredSession]" = OrderedDict()

    def _evict_expired(self, now: float) -> None:
        expired = [sid for sid, s in self._sessions.items() if now - s.last_used > self.ttl_seconds]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.info("Expired %d idle sessions", len(expired))

    def create(self, league: LeagueData, target: str, weighted: bool = True) -> StoredSession:
        """
        Create a session for a target team.

        Raises:
            TeamNotFoundError: If the target is not in the league standings
        """
        session = PlayoffSession(
            standings=league.standings,
            games=league.remaining_games,
            records=league.records,
            target=target,
            weighted=weighted
        )
        now = self._clock()
        self._evict_expired(now)
        while self._sessions and len(self._sessions) >= self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info("Session store full, evicted %s", evicted_id)

        stored = StoredSession(id=str(uuid.uuid4()), session=session, league=league, last_used=now)
        self._sessions[stored.id] = stored
        return stored

    def get(self, session_id: str) -> Optional[StoredSession]:
        now = self._clock()
        self._evict_expired(now)
        stored = self._sessions.get(session_id)
        if stored is not None:
            stored.last_used = now
            self._sessions.move_to_end(session_id)
        return stored

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


_store = SessionStore()


def get_session_store() -> SessionStore:
    """Dependency for the process-wide session store."""
    return _store


def get_provider() -> ScheduleProvider:
    """Dependency for the league data provider."""
    return get_adapter("espn")
