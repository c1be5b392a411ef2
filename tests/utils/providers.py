"""Provider fakes: transcription, synthesis and response generation."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

from channel_voice.state.results import SynthesisResult, TranscriptResult


class FakeTranscriber:
    def __init__(self, text: str = "hello there", *, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[tuple[int, int]] = []
        self.called = asyncio.Event()

    async def transcribe(self, pcm: bytes, sample_rate: int) -> TranscriptResult:
        self.calls.append((len(pcm), sample_rate))
        self.called.set()
        if self.error is not None:
            raise self.error
        return TranscriptResult(text=self.text)


class FakeTranscriptionStream:
    def __init__(self, owner: FakeStreamingTranscriber, on_interim, on_final) -> None:
        self._owner = owner
        self._on_interim = on_interim
        self._on_final = on_final
        self.pushed: list[bytes] = []
        self.keepalives = 0
        self.closed = False

    async def push(self, pcm: bytes) -> None:
        if self._owner.fail_push:
            raise ConnectionError("stream dropped")
        self.pushed.append(pcm)
        self._on_interim("partial")

    async def keep_alive(self) -> None:
        self.keepalives += 1

    async def close(self) -> None:
        self.closed = True
        for text in self._owner.finals:
            self._on_final(text)


class FakeStreamingTranscriber(FakeTranscriber):
    def __init__(
        self,
        text: str = "batch text",
        *,
        finals: tuple[str, ...] = ("streamed", "text"),
        fail_open: bool = False,
        fail_push: bool = False,
    ) -> None:
        super().__init__(text)
        self.finals = finals
        self.fail_open = fail_open
        self.fail_push = fail_push
        self.streams: list[FakeTranscriptionStream] = []

    async def open_stream(self, sample_rate: int, *, on_interim, on_final) -> FakeTranscriptionStream:
        if self.fail_open:
            raise ConnectionError("cannot open stream")
        stream = FakeTranscriptionStream(self, on_interim, on_final)
        self.streams.append(stream)
        return stream


class FakeSynthesizer:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error
        self.texts: list[str] = []

    async def synthesize(self, text: str) -> SynthesisResult:
        self.texts.append(text)
        if self.error is not None:
            raise self.error
        return SynthesisResult(audio=f"audio:{text}".encode(), format="mp3")


class FakeStreamSynthesizer(FakeSynthesizer):
    stream_format = "opus"

    def __init__(self, frames: tuple[bytes, ...] = (b"f1", b"f2", b"f3")) -> None:
        super().__init__()
        self.frames = frames
        self.closes = 0

    async def synthesize_stream(self, text: str) -> AsyncIterator[bytes]:
        self.texts.append(text)
        try:
            for frame in self.frames:
                await asyncio.sleep(0)
                yield frame
        finally:
            self.closes += 1


class FakeResponder:
    def __init__(self, reply: str = "sure thing") -> None:
        self.reply = reply
        self.calls: list[tuple[str, str, str, str]] = []

    async def respond(self, speaker_id: str, group_id: str, channel_id: str, text: str) -> str:
        self.calls.append((speaker_id, group_id, channel_id, text))
        return self.reply


__all__ = [
    "FakeResponder",
    "FakeStreamSynthesizer",
    "FakeStreamingTranscriber",
    "FakeSynthesizer",
    "FakeTranscriber",
    "FakeTranscriptionStream",
]
