"""Fast settings for unit tests."""

from __future__ import annotations

from pathlib import Path
from dataclasses import replace

from channel_voice.runtime.settings import load_settings
from channel_voice.state.settings import VoiceSettings, HeartbeatSettings

FAST_HEARTBEAT = HeartbeatSettings(
    interval_ms=10,
    max_reconnect_attempts=3,
    backoff_base_ms=1,
    backoff_max_ms=4,
    recovery_signal_timeout_ms=10,
    join_timeout_ms=50,
)


def make_settings(
    *,
    silence_ms: int = 50,
    min_audio_ms: int = 100,
    max_recording_ms: int = 30000,
    barge_in: bool = True,
    streaming: bool = False,
    allowed: tuple[str, ...] = (),
    overlay_path: Path | None = None,
    heartbeat: HeartbeatSettings | None = None,
) -> VoiceSettings:
    settings = load_settings(
        {
            "silence_threshold_ms": silence_ms,
            "min_audio_ms": min_audio_ms,
            "max_recording_ms": max_recording_ms,
            "barge_in": barge_in,
            "streaming_stt": streaming,
            "allowed_speakers": list(allowed),
            "heartbeat_interval_ms": 60000,
            "openai": {"api_key": "sk-test"},
            "thinking_sound": {
                "enabled": overlay_path is not None,
                "path": str(overlay_path or "missing.mp3"),
            },
        }
    )
    if heartbeat is not None:
        settings = replace(settings, heartbeat=heartbeat)
    return settings


__all__ = ["FAST_HEARTBEAT", "make_settings"]
