"""Logging configuration."""

from __future__ import annotations

from .env import env_str, env_bool, env_list

LOG_LEVEL: str = env_str("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = env_str("LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s: %(message)s")

# Loggers held at WARNING unless SHOW_ACCESS_LOGS is set.
QUIET_LOGGERS: tuple[str, ...] = env_list("QUIET_LOGGERS") or ("uvicorn.access",)
SHOW_ACCESS_LOGS: bool = env_bool("SHOW_ACCESS_LOGS", False)

__all__ = ["LOG_FORMAT", "LOG_LEVEL", "QUIET_LOGGERS", "SHOW_ACCESS_LOGS"]
