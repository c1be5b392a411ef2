"""Response generator contract."""

from __future__ import annotations

from typing import Protocol


class ResponseGenerator(Protocol):
    async def respond(self, speaker_id: str, group_id: str, channel_id: str, text: str) -> str: ...


__all__ = ["ResponseGenerator"]
