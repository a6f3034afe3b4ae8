"""Backend health monitoring.

Hides how readiness is determined (listing endpoint + model lookup) and
how often it is refreshed.
"""

import asyncio
import contextlib
import time
from typing import Any

from ..backend.base import InferenceBackend
from ..backend.exceptions import BackendPayloadError
from .models import HealthSnapshot

DEFAULT_PROBE_TIMEOUT = 5.0
DEFAULT_INTERVAL = 30.0


class HealthMonitor:
    """Probes an inference backend and caches the latest snapshot.

    probe() never raises; failures are reported in the snapshot. The
    cached snapshot is replaced whole on every probe.
    """

    def __init__(
        self,
        backend: InferenceBackend,
        model_name: str | None = None,
        interval: float = DEFAULT_INTERVAL,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    ) -> None:
        """Initialize the monitor.

        Args:
            backend: Backend to probe
            model_name: Model that must be installed (default: backend.model)
            interval: Seconds between periodic probes
            probe_timeout: Timeout for the listing request in seconds
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._backend = backend
        self._model_name = model_name or backend.model
        self._interval = interval
        self._probe_timeout = probe_timeout
        self._snapshot = HealthSnapshot(model_name=self._model_name)
        self._task: asyncio.Task[None] | None = None
        self._debug_callback: Any = None

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "health", message)

    def get_status(self) -> HealthSnapshot:
        """Return the cached snapshot without probing."""
        return self._snapshot

    async def probe(self) -> HealthSnapshot:
        """Check backend connectivity, then model availability.

        A backend that answers with an unusable model list is reachable,
        but its model is not ready.

        Returns:
            The new snapshot, which also becomes the cached one
        """
        try:
            models = await self._backend.list_models(timeout=self._probe_timeout)
        except BackendPayloadError as e:
            self._debug("warning", f"Unusable model list: {e}")
            snapshot = HealthSnapshot(
                backend_reachable=True,
                model_ready=False,
                model_name=self._model_name,
                last_error=str(e),
                checked_at=time.monotonic()
            )
        except Exception as e:
            cause = str(e) or type(e).__name__
            self._debug("warning", f"Health check failed: {cause}")
            snapshot = HealthSnapshot(
                backend_reachable=False,
                model_ready=False,
                model_name=self._model_name,
                last_error=cause,
                checked_at=time.monotonic()
            )
        else:
            model_ready = any(m.name == self._model_name for m in models)
            if not model_ready:
                self._debug(
                    "warning",
                    f"Model {self._model_name} not installed "
                    f"({len(models)} model(s) available)"
                )
            snapshot = HealthSnapshot(
                backend_reachable=True,
                model_ready=model_ready,
                model_name=self._model_name,
                last_error=None,
                checked_at=time.monotonic()
            )

        self._snapshot = snapshot
        self._debug("debug", f"Health: {snapshot.label}")
        return snapshot

    async def start(self) -> HealthSnapshot:
        """Probe once, then keep probing every `interval` seconds.

        Calling start() while already running only probes.
        """
        snapshot = await self.probe()
        if not self.is_running:
            self._task = asyncio.create_task(self._run())
        return snapshot

    async def stop(self) -> None:
        """Cancel periodic probing (idempotent)."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self.probe()
