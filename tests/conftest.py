"""Pytest configuration and shared fixtures."""
import asyncio
import os
from typing import Any

import pytest

from kei_tutor.backend import (
    GenerateOptions,
    GenerateResponse,
    InferenceBackend,
    ModelInfo,
)
from kei_tutor.config import ChatConfig
from kei_tutor.dialogue import DialogueSession

MODEL = "llama3.2:3b"


class FakeBackend(InferenceBackend):
    """In-memory backend with scriptable failures.

    Set `list_error` / `generate_error` to an exception to raise it, or
    `generate_delay` to make generation slow.
    """

    def __init__(
        self,
        models: list[str] | None = None,
        reply: str = "Bitcoin is digital money.",
        model: str = MODEL
    ) -> None:
        self._model = model
        self.models = [MODEL] if models is None else models
        self.reply = reply
        self.list_error: Exception | None = None
        self.generate_error: Exception | None = None
        self.generate_delay: float = 0.0
        self.prompts: list[str] = []
        self.options: list[GenerateOptions | None] = []
        self.list_calls = 0
        self.closed = False

    @property
    def model(self) -> str:
        return self._model

    async def list_models(self, timeout: float | None = None) -> list[ModelInfo]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return [ModelInfo(name=name) for name in self.models]

    async def generate(
        self,
        prompt: str,
        options: GenerateOptions | None = None,
        model: str | None = None,
        timeout: float | None = None,
        **kwargs: Any
    ) -> GenerateResponse:
        self.prompts.append(prompt)
        self.options.append(options)
        if self.generate_delay:
            await asyncio.sleep(self.generate_delay)
        if self.generate_error is not None:
            raise self.generate_error
        return GenerateResponse(content=self.reply, model=model or self._model)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def backend():
    """Return a healthy fake backend."""
    return FakeBackend()


@pytest.fixture
def chat_config():
    """Return chat settings with the default limits."""
    return ChatConfig(max_history_length=20, max_message_length=1000, context_window=10)


@pytest.fixture
def session(backend, chat_config):
    """Return a dialogue session over the fake backend."""
    return DialogueSession(backend, config=chat_config, request_timeout=5.0)


@pytest.fixture(scope="session")
def ollama_url():
    """Return a live Ollama URL from the environment, if any."""
    return os.getenv("KEI_OLLAMA_URL")
