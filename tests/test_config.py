"""Unit tests for configuration loading and validation."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from kei_tutor.config import (
    AppConfig,
    ConfigError,
    build_config,
    load_config,
    validate_config,
)


class TestDefaults:
    """Tests for default configuration values."""

    def test_defaults(self):
        """Test the default settings."""
        config = AppConfig()

        assert config.ollama.url == "http://localhost:11434/api"
        assert config.ollama.model == "llama3.2:3b"
        assert config.ollama.timeout_ms == 60000
        assert config.ollama.timeout_seconds == 60.0
        assert config.chat.max_history_length == 20
        assert config.chat.health_check_interval_ms == 30000
        assert config.chat.health_check_interval_seconds == 30.0
        assert config.chat.max_message_length == 1000
        assert config.chat.context_window == 10
        assert config.chat.persona_name == "Kei"


class TestLoadConfig:
    """Tests for environment-based loading."""

    def test_empty_environment_uses_defaults(self):
        """Test that unset variables keep their defaults."""
        assert load_config({}) == AppConfig()

    def test_reads_environment(self):
        """Test that environment values are parsed into typed fields."""
        config = load_config({
            "KEI_OLLAMA_URL": "http://gpu-box:11434/api/",
            "KEI_OLLAMA_MODEL": "mistral:7b",
            "KEI_OLLAMA_TIMEOUT": "120000",
            "KEI_CHAT_MAX_HISTORY": "40",
            "KEI_HEALTH_CHECK_INTERVAL": "5000",
            "KEI_MAX_MESSAGE_LENGTH": "500",
            "KEI_CONTEXT_WINDOW": "6",
            "KEI_PERSONA_NAME": "Satoshi",
        })

        assert config.ollama.url == "http://gpu-box:11434/api"
        assert config.ollama.model == "mistral:7b"
        assert config.ollama.timeout_ms == 120000
        assert config.chat.max_history_length == 40
        assert config.chat.health_check_interval_ms == 5000
        assert config.chat.max_message_length == 500
        assert config.chat.context_window == 6
        assert config.chat.persona_name == "Satoshi"

    def test_invalid_environment_raises(self):
        """Test that bad values raise ConfigError listing every problem."""
        with pytest.raises(ConfigError) as exc_info:
            load_config({
                "KEI_OLLAMA_URL": "  ",
                "KEI_OLLAMA_MODEL": "",
                "KEI_OLLAMA_TIMEOUT": "999",
                "KEI_CHAT_MAX_HISTORY": "0",
            })

        errors = exc_info.value.errors
        assert len(errors) == 4
        assert "ollama.url: Ollama URL is required" in errors
        assert "ollama.model: Ollama model is required" in errors
        assert any(e.startswith("ollama.timeout_ms:") for e in errors)
        assert any(e.startswith("chat.max_history_length:") for e in errors)

    def test_non_numeric_timeout_raises(self):
        """Test that non-numeric numbers are reported."""
        with pytest.raises(ConfigError, match="timeout_ms"):
            load_config({"KEI_OLLAMA_TIMEOUT": "soon"})


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid_values(self):
        """Test that valid values produce no errors."""
        assert validate_config({"ollama": {"timeout_ms": 1000}, "chat": {"max_history_length": 1}}) == []

    @given(st.integers(max_value=999))
    def test_timeout_below_minimum(self, timeout_ms: int):
        """Property test: timeouts under one second are rejected."""
        errors = validate_config({"ollama": {"timeout_ms": timeout_ms}})
        assert len(errors) == 1
        assert errors[0].startswith("ollama.timeout_ms:")

    @given(st.integers(min_value=1, max_value=10_000))
    def test_history_length_accepted(self, length: int):
        """Property test: any history length of at least 1 is accepted."""
        config = build_config({"chat": {"max_history_length": length}})
        assert config.chat.max_history_length == length

    def test_health_interval_only_needs_to_be_positive(self):
        """Test that short intervals are allowed and zero is not."""
        assert build_config({"chat": {"health_check_interval_ms": 1}}).chat.health_check_interval_ms == 1
        errors = validate_config({"chat": {"health_check_interval_ms": 0}})
        assert len(errors) == 1
        assert errors[0].startswith("chat.health_check_interval_ms:")

    def test_config_is_frozen(self):
        """Test that configuration cannot be mutated after loading."""
        config = AppConfig()
        with pytest.raises(ValueError):
            config.ollama.model = "other"  # type: ignore
