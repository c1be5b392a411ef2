"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProviderCredentials:
    openai_api_key: str = ""
    deepgram_api_key: str = ""
    elevenlabs_api_key: str = ""


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    stt_provider: str
    tts_provider: str
    tts_voice: str
    streaming_stt: bool
    stt_model: str
    tts_model: str
    elevenlabs_voice_id: str
    stream_keepalive_s: float
    credentials: ProviderCredentials


@dataclass(frozen=True, slots=True)
class SegmentationSettings:
    silence_threshold_ms: int
    min_audio_ms: int
    max_recording_ms: int
    vad_sensitivity: str
    vad_threshold: float
    sample_rate_hz: int


@dataclass(frozen=True, slots=True)
class HeartbeatSettings:
    interval_ms: int
    max_reconnect_attempts: int
    backoff_base_ms: int
    backoff_max_ms: int
    recovery_signal_timeout_ms: int
    join_timeout_ms: int


@dataclass(frozen=True, slots=True)
class OverlaySettings:
    enabled: bool
    path: Path
    volume: float
    stop_delay_ms: int


@dataclass(frozen=True, slots=True)
class VoiceSettings:
    providers: ProviderSettings
    segmentation: SegmentationSettings
    heartbeat: HeartbeatSettings
    overlay: OverlaySettings
    barge_in: bool
    allowed_speakers: tuple[str, ...] = ()

    def is_allowed(self, speaker_id: str) -> bool:
        return not self.allowed_speakers or speaker_id in self.allowed_speakers


__all__ = [
    "HeartbeatSettings",
    "OverlaySettings",
    "ProviderCredentials",
    "ProviderSettings",
    "SegmentationSettings",
    "VoiceSettings",
]
