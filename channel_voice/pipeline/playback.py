"""Synthesis and playback with supersede semantics."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable, AsyncIterator

from channel_voice.state.audio import AudioSource
from channel_voice.transport.player import AudioPlayer
from channel_voice.providers.synthesis import SynthesisCapability
from channel_voice.providers.credentials import supports_stream_synthesis

logger = logging.getLogger(__name__)

_DEFAULT_STREAM_FORMAT = "opus"


async def _close_stream(stream: Any) -> None:
    aclose = getattr(stream, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except RuntimeError as exc:
        # Still mid-iteration in the player; it ends once the player is stopped.
        logger.debug("synthesis stream not closed: %s", exc)


class PlaybackController:
    """Owns the session's Speaking flag and the main player's output.

    A new ``speak`` stops and cancels the run in flight, waits for it to
    release, then starts. Each run clears Speaking exactly once on exit;
    superseded runs never touch it.
    """

    def __init__(
        self,
        player: AudioPlayer,
        synthesizer: SynthesisCapability,
        *,
        on_change: Callable[[bool], None] | None = None,
    ) -> None:
        self._player = player
        self._synthesizer = synthesizer
        self._on_change = on_change
        self._generation = 0
        self._lock = asyncio.Lock()
        self._task: asyncio.Task | None = None
        self._speaking = False

    @property
    def speaking(self) -> bool:
        return self._speaking

    @property
    def player(self) -> AudioPlayer:
        return self._player

    async def speak(self, text: str) -> None:
        self._generation += 1
        generation = self._generation
        self._player.stop()
        previous = self._task
        if previous is not None and not previous.done():
            previous.cancel()
        self._set_speaking(True)

        try:
            async with self._lock:
                if previous is not None:
                    await asyncio.wait({previous})
                if generation != self._generation:
                    return
                task = asyncio.create_task(self._render(text, generation))
                self._task = task
            await asyncio.wait({task})
        except asyncio.CancelledError:
            if generation == self._generation:
                self.stop()
            raise

        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            raise exc

    def stop(self) -> bool:
        """Synchronously halt the current run; ``False`` when nothing was playing."""
        if not self._speaking:
            return False
        self._generation += 1
        self._player.stop()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._set_speaking(False)
        return True

    async def close(self) -> None:
        self.stop()
        task, self._task = self._task, None
        if task is not None:
            await asyncio.wait({task})

    def _set_speaking(self, value: bool) -> None:
        if self._speaking == value:
            return
        self._speaking = value
        if self._on_change is not None:
            self._on_change(value)

    async def _render(self, text: str, generation: int) -> None:
        streams: list[Any] = []
        try:
            if supports_stream_synthesis(self._synthesizer):
                source = await self._stream_source(text, streams)
            else:
                result = await self._synthesizer.synthesize(text)
                source = AudioSource(data=result.audio, format=result.format)
            if source is None or generation != self._generation:
                return
            await self._play(source)
        finally:
            # Outer wrapper first, then the provider iterator it reads from.
            for stream in reversed(streams):
                await _close_stream(stream)
            if generation == self._generation:
                self._set_speaking(False)

    async def _stream_source(self, text: str, streams: list[Any]) -> AudioSource | None:
        frames = self._synthesizer.synthesize_stream(text).__aiter__()
        streams.append(frames)
        try:
            first = await anext(frames)
        except StopAsyncIteration:
            logger.debug("synthesis stream produced no audio")
            return None

        async def _replay() -> AsyncIterator[bytes]:
            yield first
            async for frame in frames:
                yield frame

        replay = _replay()
        streams.append(replay)
        fmt = getattr(self._synthesizer, "stream_format", None) or _DEFAULT_STREAM_FORMAT
        return AudioSource(data=replay, format=fmt)

    async def _play(self, source: AudioSource) -> None:
        done: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def _on_idle(*_args: Any) -> None:
            if not done.done():
                done.set_result(None)

        def _on_error(exc: Any = None, *_args: Any) -> None:
            logger.warning("playback error: %s", exc)
            if not done.done():
                done.set_result(None)

        self._player.add_listener("idle", _on_idle)
        self._player.add_listener("error", _on_error)
        try:
            self._player.play(source)
            await done
        finally:
            self._player.remove_listener("idle", _on_idle)
            self._player.remove_listener("error", _on_error)


__all__ = ["PlaybackController"]
