from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ModelInfo(BaseModel):
    """A model installed on the inference backend."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(description="Model tag, e.g. 'llama3.2:3b'")
    size: int | None = Field(default=None, description="Size on disk in bytes")


class GenerateOptions(BaseModel):
    """Sampling options sent with every generation request."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float = Field(default=0.9, gt=0.0, le=1.0)
    max_tokens: int = Field(default=500, ge=1)


class GenerateResponse(BaseModel):
    """Response from a non-streaming generation request."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text")
    model: str = Field(description="Model that generated the response")
    raw: dict[str, Any] = Field(
        default_factory=dict,
        description="Remaining payload fields (timings, token counts)"
    )
