"""Abstract base class for conversation stores.

The abstraction hides:
- The container used to hold messages
- How the size bound is enforced
- Locking around mutations
"""

from abc import ABC, abstractmethod

from .models import Message


class ConversationStore(ABC):
    """Ordered, size-bounded sequence of exchanged messages.

    Implementations must guarantee len(store) <= max_length after every
    append, evicting the oldest messages first.
    """

    @property
    @abstractmethod
    def max_length(self) -> int:
        """Maximum number of messages retained."""

    @abstractmethod
    def append(self, message: Message) -> None:
        """Add a message to the end, evicting from the front if needed."""

    @abstractmethod
    def snapshot(self) -> list[Message]:
        """Return an ordered copy of the current messages."""

    @abstractmethod
    def clear(self) -> None:
        """Remove all messages."""

    @abstractmethod
    def length(self) -> int:
        """Number of messages currently stored."""

    def recent(self, limit: int) -> list[Message]:
        """Return up to `limit` most recent messages, oldest first."""
        if limit <= 0:
            return []
        return self.snapshot()[-limit:]

    def __len__(self) -> int:
        return self.length()

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
