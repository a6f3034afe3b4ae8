from typing import Any

import httpx

from ..base import InferenceBackend
from ..exceptions import (
    BackendConnectionError,
    BackendError,
    BackendPayloadError,
    BackendResponseError,
    BackendTimeoutError,
)
from ..models import GenerateOptions, GenerateResponse, ModelInfo


class OllamaBackend(InferenceBackend):
    """Ollama inference backend using its native HTTP API.

    Hidden design decisions:
    - httpx client initialization and timeouts
    - Endpoint layout (/tags, /generate under the API base URL)
    - Payload shape of non-streaming generation
    - Mapping httpx failures to BackendError subclasses
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434/api",
        model: str = "llama3.2:3b",
        timeout: float = 60.0,
        **client_kwargs: Any
    ):
        """Initialize Ollama backend.

        Args:
            base_url: API base URL; '/tags' and '/generate' are appended to it
            model: Default model to use
            timeout: Default request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient
                (e.g. transport=httpx.MockTransport(...) in tests)
        """
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    async def list_models(self, timeout: float | None = None) -> list[ModelInfo]:
        """List installed models via GET {base_url}/tags.

        Args:
            timeout: Request timeout in seconds

        Returns:
            Installed models (empty if the payload has no 'models' key).
            Entries that do not describe a model are skipped.
        """
        data = await self._request("GET", "/tags", timeout=timeout)
        entries = data.get("models") or []
        if not isinstance(entries, list):
            raise BackendPayloadError("'models' in the model list is not an array")

        models = []
        for entry in entries:
            try:
                models.append(ModelInfo.model_validate(entry))
            except ValueError:
                continue
        return models

    async def generate(
        self,
        prompt: str,
        options: GenerateOptions | None = None,
        model: str | None = None,
        timeout: float | None = None,
        **kwargs: Any
    ) -> GenerateResponse:
        """Generate a completion via POST {base_url}/generate.

        Args:
            prompt: Full prompt text
            options: Sampling options
            model: Model to use (overrides default)
            timeout: Request timeout in seconds
            **kwargs: Additional Ollama request fields

        Returns:
            GenerateResponse with generated content
        """
        model_to_use = model or self._model
        payload = {
            "model": model_to_use,
            "prompt": prompt,
            "stream": False,
            "options": (options or GenerateOptions()).model_dump(),
            **kwargs,
        }

        data = await self._request("POST", "/generate", json=payload, timeout=timeout)

        content = data.get("response")
        if not isinstance(content, str):
            raise BackendPayloadError("Response payload has no 'response' text")

        raw = {k: v for k, v in data.items() if k not in ("response", "model")}
        return GenerateResponse(
            content=content,
            model=data.get("model") or model_to_use,
            raw=raw
        )

    async def _request(
        self,
        method: str,
        path: str,
        timeout: float | None = None,
        **kwargs: Any
    ) -> dict[str, Any]:
        """Send a request and decode the JSON object it returns."""
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(
                method,
                url,
                timeout=timeout if timeout is not None else self._timeout,
                **kwargs
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise BackendTimeoutError(f"Request to {url} timed out") from e
        except httpx.ConnectError as e:
            raise BackendConnectionError(f"Cannot connect to {url}: {e}") from e
        except httpx.HTTPStatusError as e:
            raise BackendResponseError(
                f"{url} returned HTTP {e.response.status_code}",
                status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise BackendError(f"Request to {url} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise BackendPayloadError(f"{url} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise BackendPayloadError(f"{url} returned a non-object payload")
        return data

    async def close(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()
