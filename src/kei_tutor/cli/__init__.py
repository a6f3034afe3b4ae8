"""Terminal front-end for kei_tutor."""

from .app import main

__all__ = ["main"]
