"""Provider result types (dataclasses only)."""

from __future__ import annotations

from typing import Literal
from dataclasses import dataclass

AudioFormat = Literal["opus", "mp3", "pcm"]


@dataclass(frozen=True, slots=True)
class TranscriptResult:
    text: str
    confidence: float | None = None
    language: str | None = None


@dataclass(frozen=True, slots=True)
class SynthesisResult:
    audio: bytes
    format: AudioFormat


__all__ = ["AudioFormat", "SynthesisResult", "TranscriptResult"]
