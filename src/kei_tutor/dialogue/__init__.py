"""Dialogue session management for kei_tutor.

Module structure:
- models.py: Result types, error taxonomy and user-facing messages
- capabilities.py: Speech protocols injected by the presentation layer
- session.py: The per-conversation state machine
- registry.py: Session-keyed registry and the process-wide default
"""

from .capabilities import SpeechSink, TranscriptionSource
from .models import DialogueErrorKind, SendResult, SessionState
from .registry import SessionRegistry, get_default_session, reset_default_session
from .session import DialogueSession

__all__ = [
    "DialogueErrorKind",
    "DialogueSession",
    "SendResult",
    "SessionRegistry",
    "SessionState",
    "SpeechSink",
    "TranscriptionSource",
    "get_default_session",
    "reset_default_session",
]
