"""Per-speaker receive subscription: raw frames -> decoder -> session mailbox."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, AsyncIterator

from channel_voice.transport.codec import AudioDecoder

logger = logging.getLogger(__name__)


class SpeakerReceiver:
    def __init__(
        self,
        speaker_id: str,
        frames: AsyncIterator[bytes],
        decoder: AudioDecoder,
        on_chunk: Callable[[str, bytes], None],
    ) -> None:
        self.speaker_id = speaker_id
        self._frames = frames
        self._decoder = decoder
        self._on_chunk = on_chunk
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        await asyncio.wait({task})

    async def _run(self) -> None:
        try:
            async for pcm in self._decoder(self._frames):
                if pcm:
                    self._on_chunk(self.speaker_id, bytes(pcm))
        except asyncio.CancelledError:
            return
        except Exception:
            logger.exception("audio decode failed for speaker=%s", self.speaker_id)
        else:
            logger.debug("receive stream ended for speaker=%s", self.speaker_id)


__all__ = ["SpeakerReceiver"]
