from enum import Enum


class SkillLevel(str, Enum):
    """Learner level selected by the user; controls prompt depth."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def description(self) -> str:
        """One-line pitch shown when choosing a level."""
        return _DESCRIPTIONS[self]

    @property
    def word_limit(self) -> int:
        """Response length ceiling in words."""
        return WORD_BUDGETS[self]


WORD_BUDGETS: dict[SkillLevel, int] = {
    SkillLevel.BEGINNER: 200,
    SkillLevel.INTERMEDIATE: 300,
    SkillLevel.ADVANCED: 400,
}

_DESCRIPTIONS: dict[SkillLevel, str] = {
    SkillLevel.BEGINNER: "New to Bitcoin? Start here with the basics!",
    SkillLevel.INTERMEDIATE: "Know some Bitcoin? Let's dive deeper!",
    SkillLevel.ADVANCED: "Bitcoin expert? Let's explore advanced topics!",
}
