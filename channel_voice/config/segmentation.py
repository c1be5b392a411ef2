"""Utterance segmentation and VAD settings (env-resolved constants only)."""

from __future__ import annotations

from .env import env_int, env_str, env_bool

ENV_SILENCE_THRESHOLD_MS = "VOICE_SILENCE_THRESHOLD_MS"
ENV_MIN_AUDIO_MS = "VOICE_MIN_AUDIO_MS"
ENV_MAX_RECORDING_MS = "VOICE_MAX_RECORDING_MS"
ENV_VAD_SENSITIVITY = "VOICE_VAD_SENSITIVITY"
ENV_BARGE_IN = "VOICE_BARGE_IN"

# Normalized RMS level a chunk must reach to count as speech.
VAD_THRESHOLDS: dict[str, float] = {
    "low": 0.01,
    "medium": 0.02,
    "high": 0.05,
}

DEFAULT_VAD_SENSITIVITY = "medium"

# Silence after the last voiced chunk before an utterance is considered complete.
SILENCE_THRESHOLD_MS: int = max(1, env_int(ENV_SILENCE_THRESHOLD_MS, 1000))

# Shorter utterances are treated as noise and never transcribed.
MIN_AUDIO_MS: int = max(0, env_int(ENV_MIN_AUDIO_MS, 300))

# Hard cutoff on a single utterance, measured from accumulated samples.
MAX_RECORDING_MS: int = max(1, env_int(ENV_MAX_RECORDING_MS, 30000))

_VAD_RAW = env_str(ENV_VAD_SENSITIVITY, DEFAULT_VAD_SENSITIVITY).lower()
VAD_SENSITIVITY: str = _VAD_RAW if _VAD_RAW in VAD_THRESHOLDS else DEFAULT_VAD_SENSITIVITY

BARGE_IN: bool = env_bool(ENV_BARGE_IN, True)

__all__ = [
    "BARGE_IN",
    "DEFAULT_VAD_SENSITIVITY",
    "ENV_BARGE_IN",
    "ENV_MAX_RECORDING_MS",
    "ENV_MIN_AUDIO_MS",
    "ENV_SILENCE_THRESHOLD_MS",
    "ENV_VAD_SENSITIVITY",
    "MAX_RECORDING_MS",
    "MIN_AUDIO_MS",
    "SILENCE_THRESHOLD_MS",
    "VAD_SENSITIVITY",
    "VAD_THRESHOLDS",
]
