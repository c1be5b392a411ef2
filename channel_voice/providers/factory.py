"""Config-driven construction of STT/TTS providers."""

from __future__ import annotations

import logging
from collections.abc import Callable

from channel_voice.errors import ProviderAuthError
from channel_voice.state.settings import ProviderSettings
from channel_voice.config.providers import STT_PROVIDERS, TTS_PROVIDERS

from .synthesis import SynthesisCapability
from .credentials import credential_for
from .transcription import TranscriptionCapability

logger = logging.getLogger(__name__)

TranscriberBuilder = Callable[[ProviderSettings], TranscriptionCapability]
SynthesizerBuilder = Callable[[ProviderSettings], SynthesisCapability]


class ProviderFactory:
    """Maps provider names to builders; builders receive resolved settings."""

    def __init__(self) -> None:
        self._transcribers: dict[str, TranscriberBuilder] = {}
        self._synthesizers: dict[str, SynthesizerBuilder] = {}

    def register_transcriber(self, name: str, builder: TranscriberBuilder) -> None:
        if name not in STT_PROVIDERS:
            raise ValueError(f"Unknown STT provider: {name}")
        self._transcribers[name] = builder

    def register_synthesizer(self, name: str, builder: SynthesizerBuilder) -> None:
        if name not in TTS_PROVIDERS:
            raise ValueError(f"Unknown TTS provider: {name}")
        self._synthesizers[name] = builder

    def create_transcriber(self, settings: ProviderSettings) -> TranscriptionCapability:
        name = settings.stt_provider
        builder = self._transcribers.get(name)
        if builder is None:
            raise ValueError(f"No transcriber registered for provider: {name}")
        self._require_credential(name, settings)
        logger.info("creating STT provider %s (model=%s)", name, settings.stt_model)
        return builder(settings)

    def create_synthesizer(self, settings: ProviderSettings) -> SynthesisCapability:
        name = settings.tts_provider
        builder = self._synthesizers.get(name)
        if builder is None:
            raise ValueError(f"No synthesizer registered for provider: {name}")
        self._require_credential(name, settings)
        logger.info("creating TTS provider %s (model=%s voice=%s)", name, settings.tts_model, settings.tts_voice)
        return builder(settings)

    @staticmethod
    def _require_credential(name: str, settings: ProviderSettings) -> None:
        if not credential_for(name, settings.credentials):
            raise ProviderAuthError(f"Missing API key for provider {name}", provider=name)


__all__ = ["ProviderFactory", "SynthesizerBuilder", "TranscriberBuilder"]
