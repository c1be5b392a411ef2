"""STT/TTS provider selection and model defaults (env-resolved constants only)."""

from __future__ import annotations

from .env import env_str, env_bool, env_float

ENV_STT_PROVIDER = "VOICE_STT_PROVIDER"
ENV_TTS_PROVIDER = "VOICE_TTS_PROVIDER"
ENV_TTS_VOICE = "VOICE_TTS_VOICE"
ENV_STREAMING_STT = "VOICE_STREAMING_STT"
ENV_STREAM_KEEPALIVE_S = "VOICE_STREAM_KEEPALIVE_S"

STT_PROVIDERS: tuple[str, ...] = (
    "whisper",
    "gpt4o-mini",
    "gpt4o-transcribe",
    "gpt4o-transcribe-diarize",
    "deepgram",
)
TTS_PROVIDERS: tuple[str, ...] = ("openai", "elevenlabs")

DEFAULT_STT_PROVIDER = "whisper"
DEFAULT_TTS_PROVIDER = "openai"
DEFAULT_TTS_VOICE = "nova"

DEFAULT_WHISPER_MODEL = "whisper-1"
DEFAULT_OPENAI_TTS_MODEL = "tts-1"
DEFAULT_DEEPGRAM_MODEL = "nova-2"
DEFAULT_ELEVENLABS_MODEL = "eleven_multilingual_v2"

# Provider names that map onto OpenAI's /audio/transcriptions model ids.
OPENAI_TRANSCRIBE_MODELS: dict[str, str] = {
    "gpt4o-mini": "gpt-4o-mini-transcribe",
    "gpt4o-transcribe": "gpt-4o-transcribe",
    "gpt4o-transcribe-diarize": "gpt-4o-transcribe-diarize",
}

ELEVENLABS_MODELS: dict[str, str] = {
    "turbo": "eleven_turbo_v2_5",
    "flash": "eleven_flash_v2_5",
    "v2": "eleven_multilingual_v2",
    "v3": "eleven_multilingual_v3",
}

# Which credential each provider needs.
PROVIDER_CREDENTIALS: dict[str, str] = {
    "whisper": "openai",
    "gpt4o-mini": "openai",
    "gpt4o-transcribe": "openai",
    "gpt4o-transcribe-diarize": "openai",
    "deepgram": "deepgram",
    "openai": "openai",
    "elevenlabs": "elevenlabs",
}

_STT_RAW = env_str(ENV_STT_PROVIDER, DEFAULT_STT_PROVIDER).lower()
STT_PROVIDER: str = _STT_RAW if _STT_RAW in STT_PROVIDERS else DEFAULT_STT_PROVIDER

_TTS_RAW = env_str(ENV_TTS_PROVIDER, DEFAULT_TTS_PROVIDER).lower()
TTS_PROVIDER: str = _TTS_RAW if _TTS_RAW in TTS_PROVIDERS else DEFAULT_TTS_PROVIDER

TTS_VOICE: str = env_str(ENV_TTS_VOICE, DEFAULT_TTS_VOICE)

STREAMING_STT: bool = env_bool(ENV_STREAMING_STT, True)

# Streaming channels close themselves after ~10s without data; stay well under that.
STREAM_KEEPALIVE_S: float = max(0.05, env_float(ENV_STREAM_KEEPALIVE_S, 5.0))

__all__ = [
    "DEFAULT_DEEPGRAM_MODEL",
    "DEFAULT_ELEVENLABS_MODEL",
    "DEFAULT_OPENAI_TTS_MODEL",
    "DEFAULT_STT_PROVIDER",
    "DEFAULT_TTS_PROVIDER",
    "DEFAULT_TTS_VOICE",
    "DEFAULT_WHISPER_MODEL",
    "ELEVENLABS_MODELS",
    "ENV_STREAMING_STT",
    "ENV_STREAM_KEEPALIVE_S",
    "ENV_STT_PROVIDER",
    "ENV_TTS_PROVIDER",
    "ENV_TTS_VOICE",
    "OPENAI_TRANSCRIBE_MODELS",
    "PROVIDER_CREDENTIALS",
    "STREAMING_STT",
    "STREAM_KEEPALIVE_S",
    "STT_PROVIDER",
    "STT_PROVIDERS",
    "TTS_PROVIDER",
    "TTS_PROVIDERS",
    "TTS_VOICE",
]
