"""Session mailbox messages (dataclasses only)."""

from __future__ import annotations

from typing import Union
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SpeechStarted:
    speaker_id: str


@dataclass(frozen=True, slots=True)
class SpeechEnded:
    speaker_id: str


@dataclass(frozen=True, slots=True)
class AudioChunk:
    speaker_id: str
    pcm: bytes


@dataclass(frozen=True, slots=True)
class SilenceElapsed:
    speaker_id: str
    generation: int


SessionEvent = Union[SpeechStarted, SpeechEnded, AudioChunk, SilenceElapsed]

__all__ = ["AudioChunk", "SessionEvent", "SilenceElapsed", "SpeechEnded", "SpeechStarted"]
