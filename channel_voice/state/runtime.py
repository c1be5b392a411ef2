"""Process-level handles owned by the host for the lifetime of the app."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from dataclasses import dataclass

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from channel_voice.state.settings import VoiceSettings
    from channel_voice.session.registry import SessionRegistry


@dataclass(slots=True)
class RuntimeDeps:
    registry: SessionRegistry
    settings: VoiceSettings

    async def shutdown(self) -> None:
        """Leave every voice channel; failures are logged, never raised."""
        active = len(self.registry.sessions())
        if active:
            logger.info("runtime: closing %d voice session(s)", active)
        try:
            await self.registry.close_all()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
