"""Text-to-speech capability contract."""

from __future__ import annotations

from typing import Protocol

from channel_voice.state.results import SynthesisResult


class SynthesisCapability(Protocol):
    """Complete-payload synthesis.

    Providers that can stream expose ``synthesize_stream(text)`` returning an
    async iterator of encoded frames and a ``stream_format`` attribute.
    """

    async def synthesize(self, text: str) -> SynthesisResult: ...


__all__ = ["SynthesisCapability"]
