"""Outbound audio player contract."""

from __future__ import annotations

from typing import Any, Literal, Protocol
from collections.abc import Callable

from channel_voice.state.audio import AudioSource

PlayerEvent = Literal["idle", "error"]
PlayerListener = Callable[..., Any]


class AudioPlayer(Protocol):
    """Plays one source at a time; emits ``idle`` when done and ``error(exc)`` on failure."""

    def play(self, source: AudioSource) -> None: ...

    def stop(self) -> None: ...

    def add_listener(self, event: PlayerEvent, callback: PlayerListener) -> None: ...

    def remove_listener(self, event: PlayerEvent, callback: PlayerListener) -> None: ...


__all__ = ["AudioPlayer", "PlayerEvent", "PlayerListener"]
