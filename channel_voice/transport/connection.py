"""Per-channel voice connection contract."""

from __future__ import annotations

from typing import Literal, Protocol
from collections.abc import Callable, AsyncIterator

from .player import AudioPlayer

ConnectionStatus = Literal["signalling", "connecting", "ready", "disconnected", "destroyed"]
SpeakingCallback = Callable[[str], None]
StatusCallback = Callable[[str], None]


class VoiceConnection(Protocol):
    @property
    def status(self) -> str: ...

    def on_speaking(self, on_start: SpeakingCallback, on_end: SpeakingCallback) -> None: ...

    def on_status(self, callback: StatusCallback) -> None: ...

    def receive(self, speaker_id: str) -> AsyncIterator[bytes]:
        """Raw encoded frames for one speaker; ends when the subscription is dropped."""
        ...

    def create_player(self) -> AudioPlayer: ...

    def subscribe(self, player: AudioPlayer) -> None:
        """Route outbound audio from ``player``; replaces any previous subscription."""
        ...

    async def wait_for_status(self, status: str, timeout_s: float) -> None:
        """Resolve once ``status`` is reached; raise ``TimeoutError`` otherwise."""
        ...

    async def rejoin(self) -> None: ...

    def destroy(self) -> None: ...


__all__ = ["ConnectionStatus", "SpeakingCallback", "StatusCallback", "VoiceConnection"]
