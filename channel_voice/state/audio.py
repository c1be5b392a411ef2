"""Audio payload types (dataclasses only)."""

from __future__ import annotations

from typing import Literal
from dataclasses import dataclass
from collections.abc import AsyncIterator

from .results import AudioFormat

HandoffReason = Literal["silence", "cutoff"]


@dataclass(frozen=True, slots=True)
class Utterance:
    """Frozen audio handed off by a recording buffer for transcription."""

    speaker_id: str
    pcm: bytes
    sample_rate: int
    duration_ms: float
    reason: HandoffReason


@dataclass(frozen=True, slots=True)
class AudioSource:
    """Playable audio: one complete blob or an async sequence of encoded frames."""

    data: bytes | AsyncIterator[bytes]
    format: AudioFormat
    volume: float = 1.0

    @property
    def streamed(self) -> bool:
        return not isinstance(self.data, (bytes, bytearray))


__all__ = ["AudioSource", "HandoffReason", "Utterance"]
