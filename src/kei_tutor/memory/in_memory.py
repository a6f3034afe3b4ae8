"""In-memory conversation store.

Messages live in a bounded deque and are lost when the process exits.
"""

import threading
from collections import deque

from .base import ConversationStore
from .models import Message


class InMemoryConversationStore(ConversationStore):
    """Deque-backed store with FIFO eviction.

    Mutations and snapshots are serialized with a lock so the bound holds
    even if two threads append at once.
    """

    def __init__(self, max_length: int = 20):
        if max_length < 1:
            raise ValueError(f"max_length must be at least 1, got {max_length}")
        self._max_length = max_length
        self._messages: deque[Message] = deque(maxlen=max_length)
        self._lock = threading.Lock()

    @property
    def max_length(self) -> int:
        return self._max_length

    def append(self, message: Message) -> None:
        """Append a message; deque(maxlen) drops the oldest on overflow."""
        with self._lock:
            self._messages.append(message)

    def snapshot(self) -> list[Message]:
        with self._lock:
            return list(self._messages)

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()

    def length(self) -> int:
        with self._lock:
            return len(self._messages)

    @property
    def backend_type(self) -> str:
        return "memory"
