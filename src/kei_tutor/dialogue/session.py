"""Dialogue session: the tutoring conversation state machine.

Hides the order of operations for a turn (validate, probe health, record,
compose, generate) and how backend failures become user-facing text.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from ..backend import (
    BackendConnectionError,
    BackendTimeoutError,
    GenerateOptions,
    InferenceBackend,
    create_backend,
)
from ..config import AppConfig, ChatConfig
from ..health import HealthMonitor, HealthSnapshot
from ..memory import ConversationStore, Message, create_conversation_store
from ..prompts import PromptComposer, SkillLevel
from .capabilities import SpeechSink, TranscriptionSource
from .models import (
    CANT_CONNECT_MESSAGE,
    EMPTY_MESSAGE,
    GREETING_TEMPLATE,
    MODEL_MISSING_TEMPLATE,
    TIMEOUT_MESSAGE,
    TOO_LONG_TEMPLATE,
    UNKNOWN_ERROR_MESSAGE,
    UNKNOWN_LEVEL_TEMPLATE,
    DialogueErrorKind,
    SendResult,
    SessionState,
)

MessageCallback = Callable[[Message], None]


class DialogueSession:
    """Orchestrates one tutoring conversation.

    States: IDLE -> SENDING -> IDLE. At most one send is expected in flight;
    callers should disable input while `is_busy` is true. Backend failures
    never raise out of send(); they come back as degraded SendResults.

    Usage:
        async with DialogueSession.from_config(load_config()) as session:
            result = await session.send("What is Bitcoin?", "beginner")
            print(result.response)
    """

    def __init__(
        self,
        backend: InferenceBackend,
        config: ChatConfig | None = None,
        store: ConversationStore | None = None,
        composer: PromptComposer | None = None,
        health: HealthMonitor | None = None,
        request_timeout: float = 60.0,
        options: GenerateOptions | None = None,
        speech_sink: SpeechSink | None = None,
        owns_backend: bool = False
    ) -> None:
        """Initialize the session.

        Args:
            backend: Inference backend used for generation and health probes
            config: Chat settings (history cap, input limit, prompt window)
            store: Conversation store (default: in-memory, capped by config)
            composer: Prompt composer (default: built from config)
            health: Health monitor (default: probes `backend`)
            request_timeout: Generation timeout in seconds
            options: Sampling options sent with every request
            speech_sink: Optional sink that speaks assistant replies
            owns_backend: Close the backend when the session closes
        """
        self._config = config or ChatConfig()
        self._backend = backend
        self._store = store if store is not None else create_conversation_store(
            "memory", max_length=self._config.max_history_length
        )
        self._composer = composer or PromptComposer(
            persona_name=self._config.persona_name,
            context_window=self._config.context_window
        )
        self._health = health or HealthMonitor(
            backend, interval=self._config.health_check_interval_seconds
        )
        self._request_timeout = request_timeout
        self._options = options or GenerateOptions()
        self._speech_sink = speech_sink
        self._owns_backend = owns_backend
        self._closed = False
        self._state = SessionState.IDLE
        self._message_callback: MessageCallback | None = None
        self._debug_callback: Any = None

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs: Any) -> "DialogueSession":
        """Create a session with an Ollama backend built from configuration."""
        backend = create_backend(
            "ollama",
            base_url=config.ollama.url,
            model=config.ollama.model,
            timeout=config.ollama.timeout_seconds
        )
        return cls(
            backend,
            config=config.chat,
            request_timeout=config.ollama.timeout_seconds,
            owns_backend=True,
            **kwargs
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state == SessionState.SENDING

    @property
    def health(self) -> HealthMonitor:
        return self._health

    @property
    def persona_name(self) -> str:
        return self._composer.persona_name

    def set_message_callback(self, callback: MessageCallback | None) -> None:
        """Set the render callback that receives display-ready messages.

        Args:
            callback: Callable receiving each Message to show, including
                assistant-style failure messages that are not stored
        """
        self._message_callback = callback

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback
        self._health.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "session", message)

    async def start(self) -> HealthSnapshot:
        """Run the first health probe and start periodic probing."""
        return await self._health.start()

    async def close(self) -> None:
        """Stop health probing and release the backend if owned (idempotent)."""
        await self._health.stop()
        if self._owns_backend and not self._closed:
            await self._backend.close()
        self._closed = True

    async def __aenter__(self) -> "DialogueSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def greeting(self, skill_level: SkillLevel | str) -> str:
        """Opening assistant line shown when a conversation starts."""
        level = SkillLevel(skill_level)
        return GREETING_TEMPLATE.format(name=self.persona_name, level=level.value)

    def get_status(self) -> HealthSnapshot:
        """Latest health snapshot, without probing."""
        return self._health.get_status()

    def get_history(self) -> list[Message]:
        """Read-only copy of the stored conversation."""
        return self._store.snapshot()

    def reset(self) -> None:
        """Clear the conversation history (idempotent)."""
        self._store.clear()
        self._debug("info", "History cleared")

    async def send(self, text: str, skill_level: SkillLevel | str) -> SendResult:
        """Send a user message and return the assistant's reply.

        Args:
            text: User input
            skill_level: Level used for this turn's prompt

        Returns:
            SendResult; success=False results explain the failure in
            `response` and are never raised
        """
        invalid = self._validate(text, skill_level)
        if invalid is not None:
            self._debug("info", f"Rejected input: {invalid.detail}")
            return invalid
        level = SkillLevel(skill_level)

        self._state = SessionState.SENDING
        try:
            result = await self._send(text, level)
        finally:
            self._state = SessionState.IDLE

        if not result.success:
            self._emit(result.as_message())
        if self._speech_sink is not None:
            self._speech_sink.speak(result.response)
        return result

    async def send_transcribed(
        self,
        source: TranscriptionSource,
        skill_level: SkillLevel | str
    ) -> SendResult:
        """Transcribe spoken input from `source` and send it."""
        text = await source.transcribe()
        return await self.send(text, skill_level)

    def _validate(self, text: str, skill_level: SkillLevel | str) -> SendResult | None:
        if not text or not text.strip():
            return self._rejected(EMPTY_MESSAGE, "Empty message")

        limit = self._config.max_message_length
        if len(text) > limit:
            return self._rejected(
                TOO_LONG_TEMPLATE.format(limit=limit),
                f"Message length {len(text)} exceeds {limit}"
            )

        try:
            SkillLevel(skill_level)
        except ValueError:
            return self._rejected(
                UNKNOWN_LEVEL_TEMPLATE.format(level=skill_level),
                "Unknown skill level"
            )
        return None

    async def _send(self, text: str, level: SkillLevel) -> SendResult:
        health = await self._health.probe()

        # Degraded paths keep the user turn too
        self._record(Message.user(text))

        if not health.backend_reachable:
            return self._degraded(
                DialogueErrorKind.BACKEND_UNAVAILABLE,
                CANT_CONNECT_MESSAGE,
                "Ollama not running"
            )
        if not health.model_ready:
            return self._degraded(
                DialogueErrorKind.MODEL_UNAVAILABLE,
                MODEL_MISSING_TEMPLATE.format(model=health.model_name),
                "Model not available"
            )

        prompt = self._composer.compose(level, self._store.snapshot())
        self._debug("debug", f"Prompt ({level.value}, {len(prompt)} chars)")

        try:
            response = await asyncio.wait_for(
                self._backend.generate(
                    prompt,
                    options=self._options,
                    timeout=self._request_timeout
                ),
                timeout=self._request_timeout
            )
        except (BackendTimeoutError, asyncio.TimeoutError):
            return self._degraded(DialogueErrorKind.TIMEOUT, TIMEOUT_MESSAGE, "Timeout")
        except BackendConnectionError:
            return self._degraded(
                DialogueErrorKind.CONNECTION_REFUSED,
                CANT_CONNECT_MESSAGE,
                "Connection refused"
            )
        except Exception as e:
            return self._degraded(
                DialogueErrorKind.UNKNOWN,
                UNKNOWN_ERROR_MESSAGE,
                str(e) or type(e).__name__
            )

        self._record(Message.assistant(response.content))
        return SendResult(response=response.content, success=True)

    def _record(self, message: Message) -> None:
        self._store.append(message)
        self._emit(message)

    def _emit(self, message: Message) -> None:
        if self._message_callback:
            self._message_callback(message)

    def _degraded(self, kind: DialogueErrorKind, response: str, detail: str) -> SendResult:
        self._debug("error", f"{kind.value}: {detail}")
        return SendResult(response=response, success=False, error=kind, detail=detail)

    @staticmethod
    def _rejected(response: str, detail: str) -> SendResult:
        return SendResult(
            response=response,
            success=False,
            error=DialogueErrorKind.VALIDATION,
            detail=detail
        )
