"""Exceptions raised by inference backends.

Providers translate transport-specific failures into these types so
callers never depend on the HTTP client in use.
"""


class BackendError(Exception):
    """Base exception for inference backend failures."""

    pass


class BackendConnectionError(BackendError):
    """Raised when the backend process cannot be reached."""

    pass


class BackendTimeoutError(BackendError):
    """Raised when a backend request exceeds its timeout."""

    pass


class BackendResponseError(BackendError):
    """Raised when the backend answers with an error status or a malformed payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class BackendPayloadError(BackendResponseError):
    """Raised when a successful (2xx) reply carries a body that cannot be used.

    The backend answered, so it is reachable; only its payload is wrong.
    """

    pass
