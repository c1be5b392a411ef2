"""PCM16 helpers: duration math and RMS voice-activity level."""

from __future__ import annotations

import numpy as np

from channel_voice.config.audio import PCM_CHANNELS, PCM_SAMPLE_WIDTH_BYTES

_FULL_SCALE = 32768.0


def bytes_per_ms(sample_rate: int) -> float:
    return sample_rate * PCM_CHANNELS * PCM_SAMPLE_WIDTH_BYTES / 1000.0


def duration_ms(nbytes: int, sample_rate: int) -> float:
    if nbytes <= 0 or sample_rate <= 0:
        return 0.0
    return nbytes / bytes_per_ms(sample_rate)


def bytes_for_ms(ms: float, sample_rate: int) -> int:
    """Byte count for ``ms`` of audio, rounded down to a whole sample frame."""
    frame = PCM_CHANNELS * PCM_SAMPLE_WIDTH_BYTES
    nbytes = int(ms * bytes_per_ms(sample_rate))
    return nbytes - (nbytes % frame)


def rms_level(chunk: bytes) -> float:
    """Root-mean-square level of a PCM16 chunk, normalized to [0, 1]."""
    usable = len(chunk) - (len(chunk) % PCM_SAMPLE_WIDTH_BYTES)
    if usable <= 0:
        return 0.0
    samples = np.frombuffer(chunk[:usable], dtype="<i2").astype(np.float64)
    return float(np.sqrt(np.mean(np.square(samples))) / _FULL_SCALE)


def is_voiced(chunk: bytes, threshold: float) -> bool:
    return rms_level(chunk) >= threshold


__all__ = ["bytes_for_ms", "bytes_per_ms", "duration_ms", "is_voiced", "rms_level"]
