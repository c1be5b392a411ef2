"""Per-utterance pump feeding a live transcription channel."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any

from channel_voice.errors import StreamingDegradation

logger = logging.getLogger(__name__)

_CLOSE_ON_ABORT_TIMEOUT_S = 1.0


class StreamingTranscriber:
    """Forwards one utterance's chunks to ``open_stream`` as they arrive.

    ``finish()`` resolves to the joined final text, or ``None`` when the
    channel could not be opened or dropped mid-utterance (the caller then
    falls back to batch transcription).
    """

    def __init__(
        self,
        transcriber: Any,
        *,
        speaker_id: str,
        sample_rate: int,
        keepalive_s: float,
    ) -> None:
        self._transcriber = transcriber
        self._speaker_id = speaker_id
        self._sample_rate = int(sample_rate)
        self._keepalive_s = max(0.01, float(keepalive_s))
        self._queue: asyncio.Queue[bytes | None] = asyncio.Queue()
        self._finals: list[str] = []
        self._degraded: StreamingDegradation | None = None
        self._finished = False
        self._task: asyncio.Task | None = None

    @property
    def degraded(self) -> bool:
        return self._degraded is not None

    def start(self) -> StreamingTranscriber:
        if self._task is None:
            self._task = asyncio.create_task(self._pump())
        return self

    def push(self, pcm: bytes) -> None:
        if self._finished or self._degraded is not None or not pcm:
            return
        self._queue.put_nowait(bytes(pcm))

    async def finish(self) -> str | None:
        if self._task is None:
            return None
        if not self._finished:
            self._finished = True
            self._queue.put_nowait(None)
        return await self._task

    async def abort(self) -> None:
        self._finished = True
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(BaseException):
            await self._task
        self._task = None

    def _on_interim(self, text: str) -> None:
        logger.debug("interim transcript speaker=%s text=%r", self._speaker_id, text)

    def _on_final(self, text: str) -> None:
        text = (text or "").strip()
        if text:
            self._finals.append(text)

    def _degrade(self, stage: str, exc: BaseException) -> None:
        self._degraded = StreamingDegradation(
            f"streaming transcription failed during {stage}: {exc}",
            speaker_id=self._speaker_id,
        )
        logger.warning("%s; falling back to batch (speaker=%s)", self._degraded.message, self._speaker_id)

    async def _pump(self) -> str | None:
        try:
            stream = await self._transcriber.open_stream(
                self._sample_rate,
                on_interim=self._on_interim,
                on_final=self._on_final,
            )
        except Exception as exc:
            self._degrade("open", exc)
            return None

        try:
            while True:
                try:
                    chunk = await asyncio.wait_for(self._queue.get(), timeout=self._keepalive_s)
                except TimeoutError:
                    await stream.keep_alive()
                    continue
                if chunk is None:
                    break
                await stream.push(chunk)
            await stream.close()
        except asyncio.CancelledError:
            with contextlib.suppress(Exception):
                await asyncio.wait_for(stream.close(), timeout=_CLOSE_ON_ABORT_TIMEOUT_S)
            raise
        except Exception as exc:
            self._degrade("streaming", exc)
            with contextlib.suppress(Exception):
                await stream.close()
            return None

        return " ".join(self._finals).strip()


__all__ = ["StreamingTranscriber"]
