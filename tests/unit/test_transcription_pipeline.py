from __future__ import annotations

import asyncio

import pytest

from channel_voice.state.audio import Utterance
from channel_voice.pipeline.transcription_pipeline import TranscriptionPipeline
from channel_voice.errors import ProviderAuthError, ProviderRequestError
from tests.utils.audio import tone, chunks
from tests.utils.providers import FakeTranscriber, FakeStreamingTranscriber


def _utterance(ms: int = 400) -> Utterance:
    pcm = tone(ms)
    return Utterance(speaker_id="alice", pcm=pcm, sample_rate=48_000, duration_ms=float(ms), reason="silence")


def _pipeline(transcriber, *, streaming: bool = True, keepalive_s: float = 5.0) -> TranscriptionPipeline:
    return TranscriptionPipeline(transcriber, streaming=streaming, sample_rate=48_000, keepalive_s=keepalive_s)


@pytest.mark.asyncio
async def test_batch_transcription_returns_result() -> None:
    transcriber = FakeTranscriber("turn on the lights")
    pipeline = _pipeline(transcriber, streaming=False)
    utterance = _utterance()

    result = await pipeline.transcribe(utterance)

    assert result is not None
    assert result.text == "turn on the lights"
    assert transcriber.calls == [(len(utterance.pcm), 48_000)]


@pytest.mark.asyncio
async def test_streaming_disabled_for_batch_only_provider() -> None:
    pipeline = _pipeline(FakeTranscriber(), streaming=True)
    assert not pipeline.streaming
    assert pipeline.open_stream("alice") is None


@pytest.mark.asyncio
async def test_request_error_drops_only_this_utterance() -> None:
    transcriber = FakeTranscriber(error=ProviderRequestError("boom", provider="whisper", status=500))
    pipeline = _pipeline(transcriber, streaming=False)

    assert await pipeline.transcribe(_utterance()) is None


@pytest.mark.asyncio
async def test_empty_text_yields_no_result() -> None:
    pipeline = _pipeline(FakeTranscriber("   "), streaming=False)
    assert await pipeline.transcribe(_utterance()) is None


@pytest.mark.asyncio
async def test_auth_error_propagates() -> None:
    pipeline = _pipeline(FakeTranscriber(error=ProviderAuthError("bad key", provider="whisper")), streaming=False)
    with pytest.raises(ProviderAuthError):
        await pipeline.transcribe(_utterance())


@pytest.mark.asyncio
async def test_streaming_joins_final_events_without_batch_call() -> None:
    transcriber = FakeStreamingTranscriber(finals=("hello", "world"))
    pipeline = _pipeline(transcriber)
    utterance = _utterance()

    stream = pipeline.open_stream("alice")
    assert stream is not None
    for chunk in chunks(utterance.pcm):
        stream.push(chunk)

    result = await pipeline.transcribe(utterance, stream)

    assert result is not None
    assert result.text == "hello world"
    assert transcriber.calls == []
    assert b"".join(transcriber.streams[0].pushed) == utterance.pcm
    assert transcriber.streams[0].closed


@pytest.mark.asyncio
async def test_stream_open_failure_falls_back_to_batch_with_same_audio() -> None:
    transcriber = FakeStreamingTranscriber("from batch", fail_open=True)
    pipeline = _pipeline(transcriber)
    utterance = _utterance()

    stream = pipeline.open_stream("alice")
    assert stream is not None
    for chunk in chunks(utterance.pcm):
        stream.push(chunk)

    result = await pipeline.transcribe(utterance, stream)

    assert stream.degraded
    assert result is not None
    assert result.text == "from batch"
    assert transcriber.calls == [(len(utterance.pcm), 48_000)]


@pytest.mark.asyncio
async def test_stream_dropped_mid_utterance_falls_back_to_batch() -> None:
    transcriber = FakeStreamingTranscriber("from batch", fail_push=True)
    pipeline = _pipeline(transcriber)
    utterance = _utterance()

    stream = pipeline.open_stream("alice")
    assert stream is not None
    stream.push(utterance.pcm)

    result = await pipeline.transcribe(utterance, stream)

    assert result is not None
    assert result.text == "from batch"
    assert len(transcriber.calls) == 1


@pytest.mark.asyncio
async def test_stream_sends_keepalives_while_idle() -> None:
    transcriber = FakeStreamingTranscriber()
    pipeline = _pipeline(transcriber, keepalive_s=0.01)

    stream = pipeline.open_stream("alice")
    assert stream is not None
    await asyncio.sleep(0.06)
    await stream.finish()

    assert transcriber.streams[0].keepalives >= 2


@pytest.mark.asyncio
async def test_abort_closes_stream_without_result() -> None:
    transcriber = FakeStreamingTranscriber()
    pipeline = _pipeline(transcriber)

    stream = pipeline.open_stream("alice")
    assert stream is not None
    await asyncio.sleep(0)
    await stream.abort()

    assert await stream.finish() is None
    assert transcriber.streams[0].closed
