"""Credential and capability lookups for configured providers."""

from __future__ import annotations

from typing import Any

from channel_voice.config.providers import PROVIDER_CREDENTIALS
from channel_voice.state.settings import ProviderCredentials


def credential_name(provider: str) -> str:
    try:
        return PROVIDER_CREDENTIALS[provider]
    except KeyError:
        raise ValueError(f"Unknown provider: {provider}") from None


def credential_for(provider: str, credentials: ProviderCredentials) -> str:
    name = credential_name(provider)
    return str(getattr(credentials, f"{name}_api_key", "") or "")


def supports_streaming(transcriber: Any) -> bool:
    return callable(getattr(transcriber, "open_stream", None))


def supports_stream_synthesis(synthesizer: Any) -> bool:
    return callable(getattr(synthesizer, "synthesize_stream", None))


__all__ = ["credential_for", "credential_name", "supports_stream_synthesis", "supports_streaming"]
