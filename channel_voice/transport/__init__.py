from .codec import AudioDecoder
from .media import MediaTransport
from .player import AudioPlayer, PlayerEvent
from .connection import VoiceConnection, ConnectionStatus

__all__ = [
    "AudioDecoder",
    "AudioPlayer",
    "ConnectionStatus",
    "MediaTransport",
    "PlayerEvent",
    "VoiceConnection",
]
