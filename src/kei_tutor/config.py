"""Application configuration.

Hides where settings come from (environment, .env file, defaults) and
how they are validated. Durations are expressed in milliseconds.
"""

import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Environment variable names mapped to (section, field)
ENV_VARS: dict[str, tuple[str, str]] = {
    "KEI_OLLAMA_URL": ("ollama", "url"),
    "KEI_OLLAMA_MODEL": ("ollama", "model"),
    "KEI_OLLAMA_TIMEOUT": ("ollama", "timeout_ms"),
    "KEI_CHAT_MAX_HISTORY": ("chat", "max_history_length"),
    "KEI_HEALTH_CHECK_INTERVAL": ("chat", "health_check_interval_ms"),
    "KEI_MAX_MESSAGE_LENGTH": ("chat", "max_message_length"),
    "KEI_CONTEXT_WINDOW": ("chat", "context_window"),
    "KEI_PERSONA_NAME": ("chat", "persona_name"),
}


class ConfigError(Exception):
    """Raised when configuration values fail validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid configuration: " + "; ".join(errors))


class OllamaConfig(BaseModel):
    """Connection settings for the inference backend."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        default="http://localhost:11434/api",
        description="Base URL of the Ollama API (the /tags and /generate parent)"
    )
    model: str = Field(default="llama3.2:3b", description="Model name to request")
    timeout_ms: int = Field(
        default=60000,
        ge=1000,
        description="Request timeout for generation calls"
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require a URL and drop any trailing slash."""
        v = v.strip()
        if not v:
            raise ValueError("Ollama URL is required")
        return v.rstrip("/")

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        """Require a model name."""
        v = v.strip()
        if not v:
            raise ValueError("Ollama model is required")
        return v

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class ChatConfig(BaseModel):
    """Conversation and prompt settings."""

    model_config = ConfigDict(frozen=True)

    max_history_length: int = Field(default=20, ge=1, description="History cap H")
    health_check_interval_ms: int = Field(default=30000, gt=0)
    max_message_length: int = Field(default=1000, ge=1)
    context_window: int = Field(
        default=10,
        ge=1,
        description="Recent messages included in each prompt"
    )
    persona_name: str = Field(default="Kei", min_length=1)

    @property
    def health_check_interval_seconds(self) -> float:
        return self.health_check_interval_ms / 1000


class AppConfig(BaseModel):
    """Complete application configuration."""

    model_config = ConfigDict(frozen=True)

    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)


def _format_errors(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        message = item["msg"].removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def build_config(values: Mapping[str, Mapping[str, object]] | None = None) -> AppConfig:
    """Build a validated configuration from nested section values.

    Args:
        values: Mapping like {"ollama": {"model": "..."}, "chat": {...}}

    Returns:
        Validated AppConfig

    Raises:
        ConfigError: If any value is missing or out of range
    """
    try:
        return AppConfig.model_validate(values or {})
    except ValidationError as e:
        raise ConfigError(_format_errors(e)) from e


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Load configuration from environment variables.

    Reads a .env file first when one is present. Unset variables keep
    their defaults.

    Environment variables:
        KEI_OLLAMA_URL: Ollama API base URL (default: http://localhost:11434/api)
        KEI_OLLAMA_MODEL: Model name (default: llama3.2:3b)
        KEI_OLLAMA_TIMEOUT: Generation timeout in ms (default: 60000)
        KEI_CHAT_MAX_HISTORY: Maximum stored messages (default: 20)
        KEI_HEALTH_CHECK_INTERVAL: Health probe interval in ms (default: 30000)
        KEI_MAX_MESSAGE_LENGTH: Maximum input length (default: 1000)
        KEI_CONTEXT_WINDOW: Messages included in each prompt (default: 10)
        KEI_PERSONA_NAME: Assistant persona name (default: Kei)

    Args:
        environ: Mapping to read instead of os.environ (skips .env loading)

    Raises:
        ConfigError: If the resulting configuration is invalid
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    values: dict[str, dict[str, object]] = {"ollama": {}, "chat": {}}
    for env_name, (section, field) in ENV_VARS.items():
        raw = environ.get(env_name)
        if raw is not None:
            values[section][field] = raw

    return build_config(values)


def validate_config(values: Mapping[str, Mapping[str, object]]) -> list[str]:
    """Return the list of problems with the given section values (empty if valid)."""
    try:
        build_config(values)
    except ConfigError as e:
        return e.errors
    return []
