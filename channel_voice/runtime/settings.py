"""Load runtime settings.

Defaults are resolved from the environment in `channel_voice/config/*`; a
plain mapping of named options (as handed over by the host) overrides them.
Parsing is tolerant: a value of the wrong type falls back to the default.
"""

from __future__ import annotations

from typing import Any
from pathlib import Path
from collections.abc import Mapping

from channel_voice.config.audio import PCM_SAMPLE_RATE_HZ
from channel_voice.config.secrets import (
    get_openai_api_key,
    get_deepgram_api_key,
    get_elevenlabs_api_key,
)
from channel_voice.state.settings import (
    VoiceSettings,
    OverlaySettings,
    HeartbeatSettings,
    ProviderSettings,
    ProviderCredentials,
    SegmentationSettings,
)
from channel_voice.config.overlay import (
    THINKING_PATH,
    THINKING_ENABLED,
    THINKING_VOLUME,
    THINKING_STOP_DELAY_MS,
)
from channel_voice.config.heartbeat import (
    JOIN_TIMEOUT_MS,
    RECONNECT_BACKOFF_MS,
    HEARTBEAT_INTERVAL_MS,
    MAX_RECONNECT_ATTEMPTS,
    RECONNECT_BACKOFF_MAX_MS,
    RECOVERY_SIGNAL_TIMEOUT_MS,
)
from channel_voice.config.segmentation import (
    BARGE_IN,
    MIN_AUDIO_MS,
    VAD_THRESHOLDS,
    VAD_SENSITIVITY,
    MAX_RECORDING_MS,
    SILENCE_THRESHOLD_MS,
)
from channel_voice.config.providers import (
    TTS_VOICE,
    STT_PROVIDER,
    TTS_PROVIDER,
    STT_PROVIDERS,
    STREAMING_STT,
    TTS_PROVIDERS,
    ELEVENLABS_MODELS,
    STREAM_KEEPALIVE_S,
    DEFAULT_DEEPGRAM_MODEL,
    DEFAULT_WHISPER_MODEL,
    DEFAULT_ELEVENLABS_MODEL,
    DEFAULT_OPENAI_TTS_MODEL,
    OPENAI_TRANSCRIBE_MODELS,
)


def _opt_str(options: Mapping[str, Any], key: str, default: str) -> str:
    value = options.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _opt_bool(options: Mapping[str, Any], key: str, default: bool) -> bool:
    value = options.get(key)
    return value if isinstance(value, bool) else default


def _opt_int(options: Mapping[str, Any], key: str, default: int, *, minimum: int = 0) -> int:
    value = options.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return max(minimum, int(value))


def _opt_map(options: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = options.get(key)
    return value if isinstance(value, Mapping) else {}


def _opt_choice(options: Mapping[str, Any], key: str, choices: tuple[str, ...] | Mapping[str, Any], default: str) -> str:
    value = options.get(key)
    if isinstance(value, str) and value.strip().lower() in choices:
        return value.strip().lower()
    return default


def resolve_elevenlabs_model(raw: Any) -> str:
    """Map the ``turbo``/``flash``/``v2``/``v3`` shorthands to full model ids."""
    if not isinstance(raw, str) or not raw.strip():
        return DEFAULT_ELEVENLABS_MODEL
    return ELEVENLABS_MODELS.get(raw.strip().lower(), raw.strip())


def resolve_stt_model(provider: str, openai: Mapping[str, Any], deepgram: Mapping[str, Any]) -> str:
    if provider in OPENAI_TRANSCRIBE_MODELS:
        return OPENAI_TRANSCRIBE_MODELS[provider]
    if provider == "deepgram":
        return _opt_str(deepgram, "model", DEFAULT_DEEPGRAM_MODEL)
    return _opt_str(openai, "whisper_model", DEFAULT_WHISPER_MODEL)


def _load_credentials(options: Mapping[str, Any]) -> ProviderCredentials:
    return ProviderCredentials(
        openai_api_key=_opt_str(_opt_map(options, "openai"), "api_key", get_openai_api_key()),
        deepgram_api_key=_opt_str(_opt_map(options, "deepgram"), "api_key", get_deepgram_api_key()),
        elevenlabs_api_key=_opt_str(_opt_map(options, "elevenlabs"), "api_key", get_elevenlabs_api_key()),
    )


def _load_providers(options: Mapping[str, Any]) -> ProviderSettings:
    openai = _opt_map(options, "openai")
    elevenlabs = _opt_map(options, "elevenlabs")
    deepgram = _opt_map(options, "deepgram")
    stt_provider = _opt_choice(options, "stt_provider", STT_PROVIDERS, STT_PROVIDER)
    tts_provider = _opt_choice(options, "tts_provider", TTS_PROVIDERS, TTS_PROVIDER)
    if tts_provider == "elevenlabs":
        tts_model = resolve_elevenlabs_model(elevenlabs.get("model_id"))
    else:
        tts_model = _opt_str(openai, "tts_model", DEFAULT_OPENAI_TTS_MODEL)
    return ProviderSettings(
        stt_provider=stt_provider,
        tts_provider=tts_provider,
        tts_voice=_opt_str(options, "tts_voice", TTS_VOICE),
        streaming_stt=_opt_bool(options, "streaming_stt", STREAMING_STT),
        stt_model=resolve_stt_model(stt_provider, openai, deepgram),
        tts_model=tts_model,
        elevenlabs_voice_id=_opt_str(elevenlabs, "voice_id", ""),
        stream_keepalive_s=STREAM_KEEPALIVE_S,
        credentials=_load_credentials(options),
    )


def _load_segmentation(options: Mapping[str, Any]) -> SegmentationSettings:
    sensitivity = _opt_choice(options, "vad_sensitivity", VAD_THRESHOLDS, VAD_SENSITIVITY)
    return SegmentationSettings(
        silence_threshold_ms=_opt_int(options, "silence_threshold_ms", SILENCE_THRESHOLD_MS, minimum=1),
        min_audio_ms=_opt_int(options, "min_audio_ms", MIN_AUDIO_MS),
        max_recording_ms=_opt_int(options, "max_recording_ms", MAX_RECORDING_MS, minimum=1),
        vad_sensitivity=sensitivity,
        vad_threshold=VAD_THRESHOLDS[sensitivity],
        sample_rate_hz=PCM_SAMPLE_RATE_HZ,
    )


def _load_heartbeat(options: Mapping[str, Any]) -> HeartbeatSettings:
    return HeartbeatSettings(
        interval_ms=_opt_int(options, "heartbeat_interval_ms", HEARTBEAT_INTERVAL_MS, minimum=1),
        max_reconnect_attempts=MAX_RECONNECT_ATTEMPTS,
        backoff_base_ms=RECONNECT_BACKOFF_MS,
        backoff_max_ms=RECONNECT_BACKOFF_MAX_MS,
        recovery_signal_timeout_ms=RECOVERY_SIGNAL_TIMEOUT_MS,
        join_timeout_ms=JOIN_TIMEOUT_MS,
    )


def _load_overlay(options: Mapping[str, Any]) -> OverlaySettings:
    sound = _opt_map(options, "thinking_sound")
    volume = sound.get("volume")
    if isinstance(volume, bool) or not isinstance(volume, (int, float)) or not 0.0 <= float(volume) <= 1.0:
        volume = THINKING_VOLUME
    path_raw = sound.get("path")
    path = Path(path_raw.strip()).expanduser() if isinstance(path_raw, str) and path_raw.strip() else THINKING_PATH
    return OverlaySettings(
        enabled=_opt_bool(sound, "enabled", THINKING_ENABLED),
        path=path,
        volume=float(volume),
        stop_delay_ms=_opt_int(sound, "stop_delay_ms", THINKING_STOP_DELAY_MS),
    )


def load_settings(options: Mapping[str, Any] | None = None) -> VoiceSettings:
    if not isinstance(options, Mapping):
        options = {}
    allowed = options.get("allowed_speakers")
    allowed_speakers = tuple(s for s in allowed if isinstance(s, str)) if isinstance(allowed, (list, tuple)) else ()
    return VoiceSettings(
        providers=_load_providers(options),
        segmentation=_load_segmentation(options),
        heartbeat=_load_heartbeat(options),
        overlay=_load_overlay(options),
        barge_in=_opt_bool(options, "barge_in", BARGE_IN),
        allowed_speakers=allowed_speakers,
    )


__all__ = ["load_settings", "resolve_elevenlabs_model", "resolve_stt_model"]
