"""Thinking-cue overlay settings (env-resolved constants only)."""

from __future__ import annotations

from pathlib import Path

from .env import env_int, env_str, env_bool, env_float

ENV_THINKING_ENABLED = "VOICE_THINKING_ENABLED"
ENV_THINKING_PATH = "VOICE_THINKING_PATH"
ENV_THINKING_VOLUME = "VOICE_THINKING_VOLUME"
ENV_THINKING_STOP_DELAY_MS = "VOICE_THINKING_STOP_DELAY_MS"

DEFAULT_THINKING_PATH = "assets/thinking.mp3"
DEFAULT_THINKING_VOLUME = 0.7

THINKING_ENABLED: bool = env_bool(ENV_THINKING_ENABLED, True)

THINKING_PATH: Path = Path(env_str(ENV_THINKING_PATH, DEFAULT_THINKING_PATH)).expanduser()

_VOLUME_RAW = env_float(ENV_THINKING_VOLUME, DEFAULT_THINKING_VOLUME)
THINKING_VOLUME: float = _VOLUME_RAW if 0.0 <= _VOLUME_RAW <= 1.0 else DEFAULT_THINKING_VOLUME

# Grace period the cue keeps playing after the response text is ready.
THINKING_STOP_DELAY_MS: int = max(0, env_int(ENV_THINKING_STOP_DELAY_MS, 0))

__all__ = [
    "DEFAULT_THINKING_PATH",
    "DEFAULT_THINKING_VOLUME",
    "ENV_THINKING_ENABLED",
    "ENV_THINKING_PATH",
    "ENV_THINKING_STOP_DELAY_MS",
    "ENV_THINKING_VOLUME",
    "THINKING_ENABLED",
    "THINKING_PATH",
    "THINKING_STOP_DELAY_MS",
    "THINKING_VOLUME",
]
