from .pcm import rms_level, is_voiced, duration_ms
from .silence_timer import SilenceTimer
from .recording_buffer import RecordingBuffer

__all__ = ["RecordingBuffer", "SilenceTimer", "duration_ms", "is_voiced", "rms_level"]
