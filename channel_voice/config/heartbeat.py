"""Connection health and reconnection settings (env-resolved constants only)."""

from __future__ import annotations

from .env import env_int

ENV_HEARTBEAT_INTERVAL_MS = "VOICE_HEARTBEAT_INTERVAL_MS"
ENV_RECONNECT_BACKOFF_MS = "VOICE_RECONNECT_BACKOFF_MS"
ENV_RECONNECT_BACKOFF_MAX_MS = "VOICE_RECONNECT_BACKOFF_MAX_MS"
ENV_RECOVERY_SIGNAL_TIMEOUT_MS = "VOICE_RECOVERY_SIGNAL_TIMEOUT_MS"
ENV_JOIN_TIMEOUT_MS = "VOICE_JOIN_TIMEOUT_MS"

HEARTBEAT_INTERVAL_MS: int = max(10, env_int(ENV_HEARTBEAT_INTERVAL_MS, 30000))

# Fixed by design; not exposed through the environment.
MAX_RECONNECT_ATTEMPTS: int = 3

RECONNECT_BACKOFF_MS: int = max(0, env_int(ENV_RECONNECT_BACKOFF_MS, 1000))
RECONNECT_BACKOFF_MAX_MS: int = max(RECONNECT_BACKOFF_MS, env_int(ENV_RECONNECT_BACKOFF_MAX_MS, 8000))

# How long a disconnected transport gets to report signalling/connecting on its own.
RECOVERY_SIGNAL_TIMEOUT_MS: int = max(0, env_int(ENV_RECOVERY_SIGNAL_TIMEOUT_MS, 5000))

# Bounded wait for the ready state after join or rejoin.
JOIN_TIMEOUT_MS: int = max(1, env_int(ENV_JOIN_TIMEOUT_MS, 20000))

__all__ = [
    "ENV_HEARTBEAT_INTERVAL_MS",
    "ENV_JOIN_TIMEOUT_MS",
    "ENV_RECONNECT_BACKOFF_MAX_MS",
    "ENV_RECONNECT_BACKOFF_MS",
    "ENV_RECOVERY_SIGNAL_TIMEOUT_MS",
    "HEARTBEAT_INTERVAL_MS",
    "JOIN_TIMEOUT_MS",
    "MAX_RECONNECT_ATTEMPTS",
    "RECONNECT_BACKOFF_MAX_MS",
    "RECONNECT_BACKOFF_MS",
    "RECOVERY_SIGNAL_TIMEOUT_MS",
]
