"""Read-only session observations (dataclasses only)."""

from __future__ import annotations

from typing import Any, Literal
from dataclasses import asdict, dataclass

SessionPhase = Literal["joining", "active", "leaving"]


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    group_id: str
    channel_id: str
    phase: SessionPhase
    speaking: bool
    connection_status: str
    heartbeat_phase: str
    consecutive_failures: int
    active_speakers: tuple[str, ...]
    pending_turns: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["active_speakers"] = list(self.active_speakers)
        return data


__all__ = ["SessionPhase", "SessionSnapshot"]
