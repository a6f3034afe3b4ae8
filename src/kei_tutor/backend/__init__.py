"""Inference backend abstraction for kei_tutor."""

from .base import InferenceBackend
from .exceptions import (
    BackendConnectionError,
    BackendError,
    BackendPayloadError,
    BackendResponseError,
    BackendTimeoutError,
)
from .factory import create_backend
from .models import GenerateOptions, GenerateResponse, ModelInfo
from .providers import OllamaBackend

__all__ = [
    "InferenceBackend",
    "create_backend",
    "BackendError",
    "BackendConnectionError",
    "BackendPayloadError",
    "BackendResponseError",
    "BackendTimeoutError",
    "GenerateOptions",
    "GenerateResponse",
    "ModelInfo",
    "OllamaBackend",
]
