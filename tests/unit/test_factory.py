from __future__ import annotations

from dataclasses import replace

import pytest

from channel_voice.errors import ProviderAuthError
from channel_voice.providers.factory import ProviderFactory
from channel_voice.runtime.settings import load_settings
from channel_voice.state.settings import ProviderCredentials
from tests.utils.providers import FakeSynthesizer, FakeTranscriber


def test_register_rejects_unknown_provider_names() -> None:
    factory = ProviderFactory()
    with pytest.raises(ValueError):
        factory.register_transcriber("carrier-pigeon", lambda _s: FakeTranscriber())
    with pytest.raises(ValueError):
        factory.register_synthesizer("whisper", lambda _s: FakeSynthesizer())


def test_create_without_builder_is_a_value_error() -> None:
    settings = load_settings({"openai": {"api_key": "sk-test"}})
    with pytest.raises(ValueError):
        ProviderFactory().create_transcriber(settings.providers)


def test_builder_receives_resolved_settings() -> None:
    seen = []
    factory = ProviderFactory()
    factory.register_transcriber("gpt4o-mini", lambda s: seen.append(s) or FakeTranscriber())
    settings = load_settings({"stt_provider": "gpt4o-mini", "openai": {"api_key": "sk-test"}})

    transcriber = factory.create_transcriber(settings.providers)

    assert isinstance(transcriber, FakeTranscriber)
    assert seen[0].stt_model == "gpt-4o-mini-transcribe"


def test_missing_credential_raises_auth_error() -> None:
    factory = ProviderFactory()
    factory.register_synthesizer("elevenlabs", lambda _s: FakeSynthesizer())
    settings = load_settings({"tts_provider": "elevenlabs"})
    providers = replace(settings.providers, credentials=ProviderCredentials(openai_api_key="sk-test"))

    with pytest.raises(ProviderAuthError) as exc:
        factory.create_synthesizer(providers)
    assert exc.value.provider == "elevenlabs"


def test_deepgram_uses_its_own_key() -> None:
    factory = ProviderFactory()
    factory.register_transcriber("deepgram", lambda _s: FakeTranscriber())
    settings = load_settings({"stt_provider": "deepgram", "deepgram": {"api_key": "dg-key"}})
    providers = replace(settings.providers, credentials=ProviderCredentials(deepgram_api_key="dg-key"))

    assert isinstance(factory.create_transcriber(providers), FakeTranscriber)
    assert providers.stt_model == "nova-2"
