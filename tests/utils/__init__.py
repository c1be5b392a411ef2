"""Shared unit-test fakes.

Focused modules:
- transport.py: in-memory connection, player and media transport
- providers.py: transcription, synthesis and response fakes
- audio.py: numpy-generated PCM16 fixtures
- settings.py: fast settings presets
"""

from __future__ import annotations

from .audio import tone, chunks, silence
from .settings import FAST_HEARTBEAT, make_settings
from .transport import FakePlayer, FakeTransport, FakeConnection, identity_decoder
from .providers import (
    FakeResponder,
    FakeSynthesizer,
    FakeTranscriber,
    FakeStreamSynthesizer,
    FakeStreamingTranscriber,
)

__all__ = [
    "FAST_HEARTBEAT",
    "FakeConnection",
    "FakePlayer",
    "FakeResponder",
    "FakeStreamSynthesizer",
    "FakeStreamingTranscriber",
    "FakeSynthesizer",
    "FakeTranscriber",
    "FakeTransport",
    "chunks",
    "identity_decoder",
    "make_settings",
    "silence",
    "tone",
]
