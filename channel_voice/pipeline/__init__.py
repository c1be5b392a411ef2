from .playback import PlaybackController
from .thinking_overlay import ThinkingOverlay
from .streaming_transcriber import StreamingTranscriber
from .transcription_pipeline import TranscriptionPipeline

__all__ = [
    "PlaybackController",
    "StreamingTranscriber",
    "ThinkingOverlay",
    "TranscriptionPipeline",
]
