"""Logging initialization."""

from __future__ import annotations

import logging

from channel_voice.config.logging import LOG_LEVEL, LOG_FORMAT, QUIET_LOGGERS, SHOW_ACCESS_LOGS


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
    if SHOW_ACCESS_LOGS:
        return
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_logging"]
