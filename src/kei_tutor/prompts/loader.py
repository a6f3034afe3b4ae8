"""Prompt text files.

The persona and each skill directive live in `<name>.txt` files shipped
with the package. A `prompts/` directory in the working directory takes
precedence, so a deployment can reword the tutor without code changes.
"""

from functools import lru_cache
from pathlib import Path

from .skill import SkillLevel

PACKAGE_PROMPTS = Path(__file__).parent
PERSONA_PROMPT = "persona"


def search_paths(name: str) -> list[Path]:
    """Candidate files for a prompt, highest precedence first."""
    filename = f"{name}.txt"
    return [Path.cwd() / "prompts" / filename, PACKAGE_PROMPTS / filename]


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Read a prompt template by name (without the .txt extension).

    Raises:
        FileNotFoundError: If no candidate file exists
    """
    candidates = search_paths(name)
    for path in candidates:
        if path.is_file():
            return path.read_text(encoding="utf-8").strip()

    searched = "\n".join(f"  - {path}" for path in candidates)
    raise FileNotFoundError(f"Prompt '{name}' not found. Searched:\n{searched}")


def load_persona(persona_name: str) -> str:
    """Persona preamble with the assistant's name filled in."""
    return load_prompt(PERSONA_PROMPT).format(name=persona_name)


def load_directive(skill_level: SkillLevel | str) -> str:
    """Skill directive with the level's word budget filled in.

    Raises:
        ValueError: If skill_level is not a known level
    """
    level = SkillLevel(skill_level)
    return load_prompt(level.value).format(word_limit=level.word_limit)


def clear_cache() -> None:
    """Forget loaded prompts so edited files are read again."""
    load_prompt.cache_clear()
