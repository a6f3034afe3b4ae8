"""Prompt management module.

Holds the persona and skill directive texts and composes them with the
conversation transcript into the prompt sent each turn.
"""

from .composer import PromptComposer
from .loader import clear_cache, load_directive, load_persona, load_prompt
from .skill import WORD_BUDGETS, SkillLevel

__all__ = [
    "load_prompt",
    "load_persona",
    "load_directive",
    "clear_cache",
    "PromptComposer",
    "SkillLevel",
    "WORD_BUDGETS",
]
