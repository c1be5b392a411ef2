"""Shared error types for the voice session pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, slots=True)
class VoiceError(Exception):
    """Base class for every failure raised by the voice pipeline."""

    message: str

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)


@dataclass(eq=False, slots=True)
class JoinFailure(VoiceError):
    """The transport never produced a usable connection; no session was created."""

    group_id: str = ""
    channel_id: str = ""


@dataclass(eq=False, slots=True)
class JoinTimeout(JoinFailure):
    """The connection did not reach the ready state within the bounded wait."""

    timeout_s: float = 0.0


@dataclass(eq=False, slots=True)
class ProviderAuthError(VoiceError):
    """Missing or rejected credential. Fatal at provider construction, never retried."""

    provider: str = ""


@dataclass(eq=False, slots=True)
class ProviderRequestError(VoiceError):
    """Network/HTTP failure from an STT or TTS provider. Drops one utterance or response."""

    provider: str = ""
    status: int | None = None


@dataclass(eq=False, slots=True)
class StreamingDegradation(VoiceError):
    """The streaming transcription channel failed; the utterance falls back to batch."""

    speaker_id: str = ""


@dataclass(eq=False, slots=True)
class TransportDisconnect(VoiceError):
    """Reconnection attempts were exhausted; fatal to one session only."""

    group_id: str = ""
    attempts: int = 0


@dataclass(eq=False, slots=True)
class SessionNotFound(VoiceError):
    """No active session exists for the requested channel group."""

    group_id: str = ""


__all__ = [
    "JoinFailure",
    "JoinTimeout",
    "ProviderAuthError",
    "ProviderRequestError",
    "SessionNotFound",
    "StreamingDegradation",
    "TransportDisconnect",
    "VoiceError",
]
