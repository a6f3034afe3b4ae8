"""Integration tests against a live Ollama server.

Run with KEI_OLLAMA_URL set (and optionally KEI_OLLAMA_MODEL), e.g.:
    KEI_OLLAMA_URL=http://localhost:11434/api pytest -m integration
"""
import os

import pytest

from kei_tutor.config import load_config
from kei_tutor.dialogue import DialogueSession
from kei_tutor.memory import Sender

pytestmark = pytest.mark.integration


@pytest.fixture
def live_config(ollama_url):
    """Return configuration for the live server, skipping when none is set."""
    if not ollama_url:
        pytest.skip("KEI_OLLAMA_URL not set")
    return load_config(dict(os.environ))


class TestLiveOllama:
    """End-to-end tests over the real HTTP backend."""

    @pytest.mark.asyncio
    async def test_probe_reaches_server(self, live_config):
        """Test that the configured server answers the health probe."""
        async with DialogueSession.from_config(live_config) as session:
            status = session.get_status()

        assert status.backend_reachable, status.last_error
        assert status.model_name == live_config.ollama.model

    @pytest.mark.asyncio
    async def test_send_round_trip(self, live_config):
        """Test a full turn when the configured model is installed."""
        async with DialogueSession.from_config(live_config) as session:
            if not session.get_status().is_ready:
                pytest.skip(f"Model {live_config.ollama.model} not installed")

            result = await session.send("What is Bitcoin? Answer in one sentence.", "beginner")
            history = session.get_history()

        assert result.success, result.detail
        assert result.response.strip()
        assert [m.sender for m in history] == [Sender.USER, Sender.ASSISTANT]
