"""
Analysis session registry.

Keeps recent `AnalysisSession` objects in memory so a client can change
filters or the search term and get a new view without resubmitting and
re-extracting its save documents.

INVARIANTS:
- Only sessions holding a completed result are registered
- The registry is bounded; the least recently used session is evicted
- Nothing is persisted; a restart forgets every session
"""

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from threading import Lock

from decotracker.config import settings
from decotracker.models.failure import SessionNotFoundError
from decotracker.services.analysis import AnalysisSession

logger = logging.getLogger(__name__)


@dataclass
class SessionRegistry:
    """Thread-safe, size-bounded map of session id to `AnalysisSession`."""

    max_sessions: int = field(default_factory=lambda: settings.max_sessions)

    _sessions: OrderedDict[str, AnalysisSession] = field(default_factory=OrderedDict)
    _lock: Lock = field(default_factory=Lock)

    def add(self, session: AnalysisSession) -> str:
        """Register a session and return its new id."""
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug("Evicted analysis session %s", evicted)
        return session_id

    def get(self, session_id: str) -> AnalysisSession:
        """
        Look up a session and mark it recently used.

        Raises:
            SessionNotFoundError: If the id is unknown or was evicted
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            self._sessions.move_to_end(session_id)
            return session

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
