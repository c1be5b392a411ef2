"""Configuration module exports (env-resolved constants only)."""

from .audio import PCM_SAMPLE_RATE_HZ
from .heartbeat import MAX_RECONNECT_ATTEMPTS
from .segmentation import VAD_THRESHOLDS

__all__ = [
    "MAX_RECONNECT_ATTEMPTS",
    "PCM_SAMPLE_RATE_HZ",
    "VAD_THRESHOLDS",
]
