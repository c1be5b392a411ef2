from .factory import ProviderFactory
from .responder import ResponseGenerator
from .synthesis import SynthesisCapability
from .transcription import TranscriptionCapability
from .transcription_stream import TranscriptionStream

__all__ = [
    "ProviderFactory",
    "ResponseGenerator",
    "SynthesisCapability",
    "TranscriptionCapability",
    "TranscriptionStream",
]
