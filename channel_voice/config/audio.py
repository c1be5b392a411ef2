"""PCM format the decoder hands to the pipeline (constants only)."""

from __future__ import annotations

# Decoded receive audio: 48kHz, mono, signed 16-bit little-endian.
PCM_SAMPLE_RATE_HZ: int = 48000
PCM_CHANNELS: int = 1
PCM_SAMPLE_WIDTH_BYTES: int = 2

# One 20ms frame at 48kHz.
PCM_FRAME_SAMPLES: int = 960

PCM_BYTES_PER_MS: int = PCM_SAMPLE_RATE_HZ * PCM_CHANNELS * PCM_SAMPLE_WIDTH_BYTES // 1000

__all__ = [
    "PCM_BYTES_PER_MS",
    "PCM_CHANNELS",
    "PCM_FRAME_SAMPLES",
    "PCM_SAMPLE_RATE_HZ",
    "PCM_SAMPLE_WIDTH_BYTES",
]
