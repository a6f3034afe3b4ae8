"""Session registry.

One active conversation per process is the default; hosts serving several
conversations keep one DialogueSession per session id, each with its own
store and health cache.
"""

import threading
from collections.abc import Callable

from ..config import AppConfig, load_config
from .session import DialogueSession

SessionFactory = Callable[[], DialogueSession]


class SessionRegistry:
    """Maps session identifiers to independent DialogueSession instances."""

    def __init__(self, factory: SessionFactory) -> None:
        """Initialize the registry.

        Args:
            factory: Zero-argument callable creating a fresh session
        """
        self._factory = factory
        self._sessions: dict[str, DialogueSession] = {}
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str) -> DialogueSession:
        """Return the session for `session_id`, creating it on first use."""
        with self._lock:
            if session_id not in self._sessions:
                self._sessions[session_id] = self._factory()
            return self._sessions[session_id]

    def get(self, session_id: str) -> DialogueSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    async def remove(self, session_id: str) -> None:
        """Close and forget a session (no-op if unknown)."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            await session.close()

    async def close_all(self) -> None:
        """Close every registered session."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            await session.close()

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


_default_session: DialogueSession | None = None
_default_lock = threading.Lock()


def get_default_session(config: AppConfig | None = None) -> DialogueSession:
    """Get or create the process-wide session.

    Args:
        config: Configuration used on first call (default: load_config())

    Returns:
        The shared DialogueSession
    """
    global _default_session
    with _default_lock:
        if _default_session is None:
            _default_session = DialogueSession.from_config(config or load_config())
        return _default_session


async def reset_default_session() -> None:
    """Close and drop the process-wide session."""
    global _default_session
    with _default_lock:
        session, _default_session = _default_session, None
    if session is not None:
        await session.close()
