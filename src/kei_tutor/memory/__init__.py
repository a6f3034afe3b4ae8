"""Conversation memory module for kei_tutor.

Provides the bounded, memory-resident message history owned by a session.
"""

from .base import ConversationStore
from .factory import create_conversation_store
from .in_memory import InMemoryConversationStore
from .models import Message, Sender

__all__ = [
    "ConversationStore",
    "InMemoryConversationStore",
    "Message",
    "Sender",
    "create_conversation_store",
]
