"""Data models for conversation memory.

Messages are immutable once created; the store relies on this to hand
out snapshots without copying each message.
"""

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Who produced a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single exchanged chat message."""

    model_config = ConfigDict(frozen=True)

    sender: Sender = Field(description="Message author")
    text: str = Field(description="Message text")
    timestamp: float = Field(
        default_factory=time.monotonic,
        description="Monotonic creation instant (time.monotonic())"
    )

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(sender=Sender.USER, text=text)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(sender=Sender.ASSISTANT, text=text)
