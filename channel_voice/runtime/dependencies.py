"""Runtime dependency construction (settings + session registry)."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Mapping

from channel_voice.state import RuntimeDeps
from channel_voice.state.settings import VoiceSettings
from channel_voice.transport.codec import AudioDecoder
from channel_voice.transport.media import MediaTransport
from channel_voice.session.registry import SessionRegistry
from channel_voice.providers.factory import ProviderFactory
from channel_voice.providers.responder import ResponseGenerator

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(
    *,
    transport: MediaTransport,
    decoder: AudioDecoder,
    responder: ResponseGenerator,
    providers: ProviderFactory,
    options: Mapping[str, Any] | None = None,
    settings: VoiceSettings | None = None,
) -> RuntimeDeps:
    settings = settings if settings is not None else load_settings(options)
    registry = SessionRegistry(
        transport=transport,
        decoder=decoder,
        providers=providers,
        responder=responder,
        settings=settings,
    )
    logger.info(
        "runtime: stt=%s (streaming=%s) tts=%s voice=%s barge_in=%s",
        settings.providers.stt_provider,
        settings.providers.streaming_stt,
        settings.providers.tts_provider,
        settings.providers.tts_voice,
        settings.barge_in,
    )
    return RuntimeDeps(registry=registry, settings=settings)


__all__ = ["RuntimeDeps", "build_runtime_deps"]
