"""Connection health state (dataclasses only)."""

from __future__ import annotations

from typing import Literal
from dataclasses import dataclass

HealthPhase = Literal["healthy", "recovering", "failed"]


@dataclass(slots=True)
class HeartbeatState:
    status: str
    phase: HealthPhase = "healthy"
    consecutive_failures: int = 0
    next_backoff_s: float = 0.0
    last_check_at: float = 0.0


__all__ = ["HealthPhase", "HeartbeatState"]
