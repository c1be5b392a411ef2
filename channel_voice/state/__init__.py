from .runtime import RuntimeDeps
from .settings import VoiceSettings
from .snapshot import SessionSnapshot

__all__ = ["RuntimeDeps", "SessionSnapshot", "VoiceSettings"]
