from __future__ import annotations

import pytest

from channel_voice.audio.silence_timer import SilenceTimer
from channel_voice.audio.recording_buffer import RecordingBuffer
from tests.utils.audio import tone


def _buffer(max_recording_ms: int = 200) -> RecordingBuffer:
    timer = SilenceTimer(1.0, lambda _generation: None)
    return RecordingBuffer("alice", sample_rate=48_000, max_recording_ms=max_recording_ms, timer=timer)


def test_new_buffer_is_idle() -> None:
    buffer = _buffer()
    assert not buffer.recording
    assert buffer.empty
    assert buffer.stream is None


def test_append_accumulates_until_cutoff() -> None:
    buffer = _buffer()
    buffer.open()

    accepted, overflow = buffer.append(tone(100))
    assert len(accepted) == 9_600
    assert overflow == b""
    assert not buffer.at_cutoff
    assert buffer.duration_ms == pytest.approx(100.0)


def test_append_splits_the_crossing_chunk_at_the_exact_cutoff() -> None:
    buffer = _buffer(max_recording_ms=200)
    buffer.open()
    buffer.append(tone(180))

    accepted, overflow = buffer.append(tone(40))

    assert len(accepted) == 1_920
    assert len(overflow) == 1_920
    assert buffer.at_cutoff
    assert buffer.size_bytes == 19_200


def test_freeze_returns_utterance_and_resets_to_idle() -> None:
    buffer = _buffer()
    buffer.open()
    pcm = tone(60)
    buffer.append(pcm)

    utterance = buffer.freeze("silence")

    assert utterance.pcm == pcm
    assert utterance.speaker_id == "alice"
    assert utterance.sample_rate == 48_000
    assert utterance.duration_ms == pytest.approx(60.0)
    assert utterance.reason == "silence"
    assert buffer.empty
    assert not buffer.recording


def test_open_refreshes_last_activity() -> None:
    buffer = _buffer()
    assert buffer.last_activity == 0.0
    buffer.open()
    assert buffer.last_activity > 0.0
