import logging
import secrets
from typing import Dict, List, Optional, Tuple

from ..models import DEFAULT_SESSION_ID, Role, Turn

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20


def generate_session_id() -> str:
    """Return a new random session id (8 hex chars)."""
    return secrets.token_hex(4)


def resolve_session_id(
    session_id: Optional[str], create_if_default: bool = True
) -> str:
    """Map the requested session id to the id the request will use.

    An absent id or the ``"default"`` sentinel starts a fresh conversation
    under a newly generated id. With ``create_if_default=False`` the sentinel
    itself is returned instead. Any other id is returned unchanged so that
    clients can resume a conversation by echoing back the id they were given.
    """
    if not session_id or session_id == DEFAULT_SESSION_ID:
        if create_if_default:
            return generate_session_id()
        return DEFAULT_SESSION_ID
    return session_id


class ConversationStore:
    """In-memory conversation history, keyed by session id.

    Each history is capped at ``history_limit`` turns; the oldest turns are
    dropped first. Nothing is persisted.
    """

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if history_limit < 1:
            raise ValueError(f"history_limit must be >= 1, got {history_limit}")
        self._history_limit = history_limit
        self._sessions: Dict[str, List[Turn]] = {}

    @property
    def history_limit(self) -> int:
        return self._history_limit

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> Tuple[Turn, ...]:
        """Return a snapshot of the history, creating an empty one if needed."""
        history = self._sessions.setdefault(session_id, [])
        return tuple(history)

    def history(self, session_id: str) -> Tuple[Turn, ...]:
        """Return a snapshot of the history without registering the session."""
        return tuple(self._sessions.get(session_id, ()))

    def append(self, session_id: str, role: Role, content: str) -> None:
        """Add a turn and trim the history to the most recent turns.

        No awaits happen here, so concurrent requests on the same session
        cannot interleave between the push and the trim.
        """
        history = self._sessions.setdefault(session_id, [])
        history.append(Turn(role=role, content=content))
        overflow = len(history) - self._history_limit
        if overflow > 0:
            del history[:overflow]
            logger.debug("Session %s trimmed by %d turn(s)", session_id, overflow)

    def clear(self, session_id: str) -> None:
        """Drop the session. Clearing an unknown session is a no-op."""
        if self._sessions.pop(session_id, None) is not None:
            logger.info("Session %s cleared", session_id)
