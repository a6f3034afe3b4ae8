"""
kei_tutor: dialogue session manager for a locally-hosted LLM tutoring avatar.

Each subpackage hides one design decision: which inference server is used
(backend), how readiness is judged (health), how prompts are laid out
(prompts), how history is bounded (memory) and how a turn is orchestrated
(dialogue).
"""

__version__ = "0.1.0"

from .config import AppConfig, ConfigError, load_config
from .dialogue import (
    DialogueErrorKind,
    DialogueSession,
    SendResult,
    get_default_session,
)
from .health import HealthSnapshot
from .memory import Message, Sender
from .prompts import SkillLevel

__all__ = [
    "AppConfig",
    "ConfigError",
    "DialogueErrorKind",
    "DialogueSession",
    "HealthSnapshot",
    "Message",
    "SendResult",
    "Sender",
    "SkillLevel",
    "get_default_session",
    "load_config",
]
