"""Result types returned by the dialogue session.

Every outcome of a send, including backend failures, is a SendResult;
failures carry a DialogueErrorKind and a user-facing explanation.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..memory.models import Message

CANT_CONNECT_MESSAGE = (
    "I'm sorry, but I can't connect to my local AI service. Please make sure "
    "Ollama is installed and running. You can install it from https://ollama.ai "
    "and run 'ollama serve' to start the service."
)
MODEL_MISSING_TEMPLATE = (
    "I'm sorry, but the AI model ({model}) is not available. "
    "Please run 'ollama pull {model}' to download it."
)
TIMEOUT_MESSAGE = (
    "I'm sorry, the AI model is taking longer than expected to respond. This "
    "usually happens on the first request as the model loads into memory. "
    "Please try again in a moment."
)
UNKNOWN_ERROR_MESSAGE = (
    "I'm sorry, I'm having trouble processing your request right now. "
    "Please try again in a moment."
)
EMPTY_MESSAGE = "Please enter a message."
TOO_LONG_TEMPLATE = "Message too long. Maximum {limit} characters allowed."
UNKNOWN_LEVEL_TEMPLATE = "Unknown skill level '{level}'. Choose beginner, intermediate or advanced."
GREETING_TEMPLATE = (
    "Hello! I'm {name}, your Bitcoin education guide. I'll be teaching you at "
    "the {level} level. Ask me anything about Bitcoin, Lightning Network, or Nostr!"
)


class SessionState(str, Enum):
    """Dialogue session states."""

    IDLE = "idle"
    SENDING = "sending"


class DialogueErrorKind(str, Enum):
    """Why a send did not produce a model reply."""

    VALIDATION = "validation"                  # Caller-correctable, no network attempted
    BACKEND_UNAVAILABLE = "backend_unavailable"  # Pre-flight: backend not reachable
    MODEL_UNAVAILABLE = "model_unavailable"    # Pre-flight: model not installed
    CONNECTION_REFUSED = "connection_refused"  # Generation call could not connect
    TIMEOUT = "timeout"                        # Generation call exceeded its timeout
    UNKNOWN = "unknown"                        # Any other transport/server failure


class SendResult(BaseModel):
    """Outcome of DialogueSession.send()."""

    model_config = ConfigDict(frozen=True)

    response: str = Field(description="Text to show the user")
    success: bool = Field(description="True when the model produced the response")
    error: DialogueErrorKind | None = Field(default=None)
    detail: str | None = Field(default=None, description="Short technical cause")

    @property
    def degraded(self) -> bool:
        """True when a backend problem is reported through the response text."""
        return self.error is not None and self.error != DialogueErrorKind.VALIDATION

    def as_message(self) -> Message:
        """Display-ready assistant-style message for the transcript."""
        return Message.assistant(self.response)
