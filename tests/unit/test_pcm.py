from __future__ import annotations

import pytest

from channel_voice.audio.pcm import rms_level, is_voiced, duration_ms, bytes_for_ms
from tests.utils.audio import tone, silence


def test_duration_ms_uses_pcm16_mono_at_48k() -> None:
    assert duration_ms(96_000, 48_000) == pytest.approx(1000.0)
    assert duration_ms(1920, 48_000) == pytest.approx(20.0)
    assert duration_ms(0, 48_000) == 0.0


def test_bytes_for_ms_is_sample_aligned() -> None:
    assert bytes_for_ms(200, 48_000) == 19_200
    assert bytes_for_ms(0.01, 48_000) % 2 == 0


def test_rms_level_of_silence_is_zero() -> None:
    assert rms_level(silence(20)) == 0.0
    assert rms_level(b"") == 0.0


def test_rms_level_of_tone_tracks_amplitude() -> None:
    level = rms_level(tone(100, amplitude=0.5))
    assert level == pytest.approx(0.5 / (2**0.5), rel=0.02)


def test_rms_level_ignores_trailing_odd_byte() -> None:
    pcm = tone(20)
    assert rms_level(pcm + b"\x7f") == pytest.approx(rms_level(pcm))


def test_is_voiced_respects_threshold() -> None:
    quiet = tone(20, amplitude=0.01)
    loud = tone(20, amplitude=0.3)
    assert not is_voiced(quiet, 0.02)
    assert is_voiced(loud, 0.02)
    assert is_voiced(quiet, 0.005)
