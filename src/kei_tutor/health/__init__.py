"""Backend health monitoring for kei_tutor."""

from .models import HealthSnapshot
from .monitor import HealthMonitor

__all__ = [
    "HealthMonitor",
    "HealthSnapshot",
]
