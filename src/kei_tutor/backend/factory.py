from typing import Any

from .base import InferenceBackend
from .providers import OllamaBackend


def create_backend(backend: str, **config: Any) -> InferenceBackend:
    """Create an inference backend instance.

    This factory function hides the instantiation logic for different backends.

    Args:
        backend: Backend type (currently only 'ollama')
        **config: Backend-specific configuration
            For Ollama:
                - base_url: str (default: 'http://localhost:11434/api')
                - model: str (default: 'llama3.2:3b')
                - timeout: float seconds (default: 60.0)

    Returns:
        Initialized backend instance

    Raises:
        ValueError: If backend type is not supported

    Examples:
        >>> backend = create_backend(
        ...     "ollama",
        ...     base_url="http://localhost:11434/api",
        ...     model="llama3.2:3b"
        ... )
    """
    if backend.lower() == "ollama":
        return OllamaBackend(**config)

    raise ValueError(
        f"Unsupported backend: {backend}. "
        f"Supported backends: 'ollama'"
    )
