"""
Guard session registry.

Each browser session owns one VisibilityStore and one DisclosureGate, created
empty the first time the session is seen. The registry is bounded; the least
recently used session is dropped once GUARD_MAX_SESSIONS is exceeded.

All guard endpoints are ``async def`` so every access happens on the event
loop thread and needs no locking.
"""

import uuid
from collections import OrderedDict
from dataclasses import dataclass, field

from app.config import settings
from app.core.logging import get_logger
from app.services.disclosure_gate import DisclosureGate
from app.services.visibility_store import VisibilityStore

logger = get_logger(__name__)


@dataclass
class GuardSession:
    session_id: str
    store: VisibilityStore = field(default_factory=VisibilityStore)
    gate: DisclosureGate = field(default_factory=DisclosureGate)


class SessionRegistry:
    """In-memory LRU map of session id to GuardSession"""

    def __init__(self, max_sessions: int | None = None) -> None:
        self.max_sessions = max_sessions or settings.GUARD_MAX_SESSIONS
        self._sessions: OrderedDict[str, GuardSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get_or_create(self, session_id: str | None) -> GuardSession:
        """
        Return the session for ``session_id``, creating it when unknown.

        New sessions always get a freshly generated id; a client-supplied id
        is only honoured when it names an existing session.
        """
        if session_id and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            return self._sessions[session_id]

        session = GuardSession(session_id=uuid.uuid4().hex)
        self._sessions[session.session_id] = session
        logger.debug("guard_session_created", guard_session_id=session.session_id)

        while len(self._sessions) > self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info("guard_session_evicted", guard_session_id=evicted_id)

        return session


# Process-wide registry used by the API dependencies
session_registry = SessionRegistry()


def get_session_registry() -> SessionRegistry:
    """Dependency returning the process-wide session registry."""
    return session_registry
