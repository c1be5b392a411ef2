"""Speech-to-text capability contract."""

from __future__ import annotations

from typing import Protocol
from collections.abc import Callable

from channel_voice.state.results import TranscriptResult

TextCallback = Callable[[str], None]


class TranscriptionCapability(Protocol):
    """Batch transcription.

    Streaming providers additionally expose
    ``async open_stream(sample_rate, *, on_interim, on_final) -> TranscriptionStream``.
    """

    async def transcribe(self, pcm: bytes, sample_rate: int) -> TranscriptResult: ...


__all__ = ["TextCallback", "TranscriptionCapability"]
