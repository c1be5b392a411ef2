from .turn import run_turn
from .registry import SessionRegistry
from .heartbeat import HeartbeatMonitor
from .voice_session import VoiceSession

__all__ = ["HeartbeatMonitor", "SessionRegistry", "VoiceSession", "run_turn"]
