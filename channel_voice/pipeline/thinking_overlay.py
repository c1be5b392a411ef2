"""Looping "thinking" cue on a secondary player."""

from __future__ import annotations

import logging
from typing import Any
from pathlib import Path
from collections.abc import Callable

from channel_voice.state.audio import AudioSource
from channel_voice.state.results import AudioFormat
from channel_voice.transport.player import AudioPlayer
from channel_voice.state.settings import OverlaySettings
from channel_voice.transport.connection import VoiceConnection

logger = logging.getLogger(__name__)

StopHandle = Callable[[], None]

_SUFFIX_FORMATS: dict[str, AudioFormat] = {
    ".mp3": "mp3",
    ".ogg": "opus",
    ".opus": "opus",
    ".pcm": "pcm",
    ".raw": "pcm",
}


def _format_for(path: Path) -> AudioFormat:
    return _SUFFIX_FORMATS.get(path.suffix.lower(), "mp3")


class ThinkingOverlay:
    def __init__(self, settings: OverlaySettings) -> None:
        self._settings = settings
        self._audio: bytes | None = None
        self._loaded = False

    @property
    def available(self) -> bool:
        return self._settings.enabled and self._load() is not None

    def _load(self) -> bytes | None:
        if not self._loaded:
            self._loaded = True
            try:
                self._audio = self._settings.path.read_bytes() or None
            except OSError as exc:
                logger.warning("thinking cue unavailable (%s): %s", self._settings.path, exc)
                self._audio = None
        return self._audio

    def start(self, connection: VoiceConnection, main_player: AudioPlayer) -> StopHandle:
        """Loop the cue on a fresh player; the returned handle restores ``main_player``."""

        def _restore_main() -> None:
            connection.subscribe(main_player)

        if not self.available:
            return _restore_main

        audio = self._audio or b""
        fmt = _format_for(self._settings.path)
        volume = self._settings.volume
        player = connection.create_player()
        stopped = False

        def _play_once() -> None:
            player.play(AudioSource(data=audio, format=fmt, volume=volume))

        def _on_idle(*_args: Any) -> None:
            if not stopped:
                _play_once()

        def _on_error(exc: Any = None, *_args: Any) -> None:
            logger.warning("thinking cue playback error: %s", exc)

        def _stop() -> None:
            nonlocal stopped
            stopped = True
            player.remove_listener("idle", _on_idle)
            player.stop()
            player.remove_listener("error", _on_error)
            _restore_main()

        player.add_listener("idle", _on_idle)
        player.add_listener("error", _on_error)
        connection.subscribe(player)
        _play_once()
        return _stop


__all__ = ["StopHandle", "ThinkingOverlay"]
