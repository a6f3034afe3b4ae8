from abc import ABC, abstractmethod
from typing import Any

from .models import GenerateOptions, GenerateResponse, ModelInfo


class InferenceBackend(ABC):
    """Abstract base class for LLM inference backends.

    This module hides the design decision of which inference server is used.
    Implementations must handle provider-specific details like:
    - HTTP client setup and endpoint layout
    - Request/response format conversion
    - Translating transport failures into BackendError subclasses

    Supports async context manager protocol for proper resource cleanup:
        async with backend:
            response = await backend.generate(prompt)
        # Automatically cleaned up
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Get the default model name."""

    @abstractmethod
    async def list_models(self, timeout: float | None = None) -> list[ModelInfo]:
        """List models installed on the backend.

        Args:
            timeout: Request timeout in seconds (None uses the backend default)

        Returns:
            Installed models

        Raises:
            BackendError: If the backend cannot be reached or answers badly
        """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        options: GenerateOptions | None = None,
        model: str | None = None,
        timeout: float | None = None,
        **kwargs: Any
    ) -> GenerateResponse:
        """Generate a completion for a single prompt.

        Args:
            prompt: Full prompt text
            options: Sampling options (None uses GenerateOptions defaults)
            model: Model to use (None uses backend's default)
            timeout: Request timeout in seconds (None uses the backend default)
            **kwargs: Provider-specific request fields

        Returns:
            GenerateResponse containing generated content

        Raises:
            BackendError: If the request fails
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "InferenceBackend":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
