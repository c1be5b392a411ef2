"""Turn-based voice conversation pipeline for shared voice channels."""

from .errors import (
    JoinFailure,
    JoinTimeout,
    VoiceError,
    SessionNotFound,
    ProviderAuthError,
    ProviderRequestError,
    TransportDisconnect,
    StreamingDegradation,
)
from .runtime.settings import load_settings
from .session.registry import SessionRegistry
from .providers.factory import ProviderFactory
from .runtime.dependencies import build_runtime_deps

__all__ = [
    "JoinFailure",
    "JoinTimeout",
    "ProviderAuthError",
    "ProviderFactory",
    "ProviderRequestError",
    "SessionNotFound",
    "SessionRegistry",
    "StreamingDegradation",
    "TransportDisconnect",
    "VoiceError",
    "build_runtime_deps",
    "load_settings",
]
