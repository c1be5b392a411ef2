"""Provider credential lookup from the environment."""

from __future__ import annotations

import os

ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_DEEPGRAM_API_KEY = "DEEPGRAM_API_KEY"
ENV_ELEVENLABS_API_KEY = "ELEVENLABS_API_KEY"


def get_openai_api_key() -> str:
    return (os.getenv(ENV_OPENAI_API_KEY) or "").strip()


def get_deepgram_api_key() -> str:
    return (os.getenv(ENV_DEEPGRAM_API_KEY) or "").strip()


def get_elevenlabs_api_key() -> str:
    return (os.getenv(ENV_ELEVENLABS_API_KEY) or "").strip()


__all__ = [
    "ENV_DEEPGRAM_API_KEY",
    "ENV_ELEVENLABS_API_KEY",
    "ENV_OPENAI_API_KEY",
    "get_deepgram_api_key",
    "get_elevenlabs_api_key",
    "get_openai_api_key",
]
