"""Media transport contract."""

from __future__ import annotations

from typing import Protocol

from .connection import VoiceConnection


class MediaTransport(Protocol):
    async def join(self, group_id: str, channel_id: str) -> VoiceConnection: ...


__all__ = ["MediaTransport"]
