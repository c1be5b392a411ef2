"""Live transcription channel contract."""

from __future__ import annotations

from typing import Protocol


class TranscriptionStream(Protocol):
    """An open provider channel for one utterance."""

    async def push(self, pcm: bytes) -> None: ...

    async def keep_alive(self) -> None:
        """Signal liveness while no audio is flowing."""
        ...

    async def close(self) -> None:
        """Flush pending audio; resolves after the last final event was delivered."""
        ...


__all__ = ["TranscriptionStream"]
