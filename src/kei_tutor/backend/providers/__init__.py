from .ollama import OllamaBackend

__all__ = ["OllamaBackend"]
