"""Prompt composition for the tutoring persona.

Hides how the persona, the skill directive and the recent transcript are
laid out in the single prompt string sent to the backend.
"""

from collections.abc import Sequence

from ..memory.models import Message, Sender
from .loader import load_directive, load_persona
from .skill import SkillLevel

DEFAULT_CONTEXT_WINDOW = 10
USER_LABEL = "User"


class PromptComposer:
    """Builds skill-level-adapted prompts from conversation history.

    compose() is pure: the output depends only on its arguments and the
    composer's construction parameters.
    """

    def __init__(
        self,
        persona_name: str = "Kei",
        context_window: int = DEFAULT_CONTEXT_WINDOW
    ) -> None:
        if context_window < 1:
            raise ValueError(f"context_window must be at least 1, got {context_window}")
        self.persona_name = persona_name
        self.context_window = context_window

    def persona(self) -> str:
        """Fixed persona preamble."""
        return load_persona(self.persona_name)

    def directive(self, skill_level: SkillLevel | str) -> str:
        """Skill-specific directive including the word budget clause.

        Raises:
            ValueError: If skill_level is not a known level
        """
        return load_directive(skill_level)

    def system_prompt(self, skill_level: SkillLevel | str) -> str:
        return f"{self.persona()} {self.directive(skill_level)}"

    def transcript(self, history: Sequence[Message]) -> str:
        """Render the most recent messages as speaker-labelled lines."""
        recent = list(history)[-self.context_window:]
        return "\n".join(
            f"{self._label(message)}: {message.text}" for message in recent
        )

    def compose(self, skill_level: SkillLevel | str, history: Sequence[Message]) -> str:
        """Build the full prompt for the next assistant turn.

        Args:
            skill_level: Level used to pick the directive
            history: Conversation so far, oldest first

        Returns:
            Prompt text ending with the assistant continuation marker
        """
        return (
            f"{self.system_prompt(skill_level)}\n"
            f"\n"
            f"Current conversation:\n"
            f"{self.transcript(history)}\n"
            f"\n"
            f"{self.persona_name}:"
        )

    def _label(self, message: Message) -> str:
        return USER_LABEL if message.sender == Sender.USER else self.persona_name
