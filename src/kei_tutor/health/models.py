from pydantic import BaseModel, ConfigDict, Field

READY_LABEL = "AI Ready"
MODEL_MISSING_LABEL = "Model Missing"
OFFLINE_LABEL = "AI Offline"


class HealthSnapshot(BaseModel):
    """Point-in-time readiness of the inference backend.

    Frozen so the monitor can only replace it as a whole value; readers
    never observe a half-updated snapshot.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    backend_reachable: bool = Field(default=False, description="Listing endpoint answered")
    model_ready: bool = Field(default=False, description="Configured model is installed")
    model_name: str = Field(description="Configured model name")
    last_error: str | None = Field(default=None, description="Cause of the last failed probe")
    checked_at: float | None = Field(
        default=None,
        description="Monotonic time of the probe (None before the first probe)"
    )

    @property
    def is_ready(self) -> bool:
        return self.backend_reachable and self.model_ready

    @property
    def label(self) -> str:
        """Short status text for the presentation layer."""
        if self.is_ready:
            return READY_LABEL
        if self.backend_reachable:
            return MODEL_MISSING_LABEL
        return OFFLINE_LABEL
