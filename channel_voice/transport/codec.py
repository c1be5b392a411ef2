"""Raw frame to PCM transform contract."""

from __future__ import annotations

from collections.abc import Callable, AsyncIterator

# Decodes raw transport frames into 48kHz mono PCM16 little-endian chunks.
AudioDecoder = Callable[[AsyncIterator[bytes]], AsyncIterator[bytes]]

__all__ = ["AudioDecoder"]
