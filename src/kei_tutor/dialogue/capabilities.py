"""Platform capabilities injected by the presentation layer.

The session only depends on these protocols, never on a concrete speech
or audio API.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SpeechSink(Protocol):
    """Speaks assistant text aloud."""

    def speak(self, text: str) -> None: ...


@runtime_checkable
class TranscriptionSource(Protocol):
    """Turns captured audio into user input text."""

    async def transcribe(self) -> str: ...
