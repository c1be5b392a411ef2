"""Explicitly owned registry of voice sessions, one per channel group."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from channel_voice.state.settings import VoiceSettings
from channel_voice.transport.codec import AudioDecoder
from channel_voice.state.snapshot import SessionSnapshot
from channel_voice.transport.media import MediaTransport
from channel_voice.providers.factory import ProviderFactory
from channel_voice.transport.connection import VoiceConnection
from channel_voice.providers.responder import ResponseGenerator
from channel_voice.providers.synthesis import SynthesisCapability
from channel_voice.providers.transcription import TranscriptionCapability
from channel_voice.pipeline.transcription_pipeline import TranscriptionPipeline
from channel_voice.errors import JoinFailure, JoinTimeout, SessionNotFound, TransportDisconnect

from .voice_session import VoiceSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Per-group locks serialize join/leave; no lock spans groups."""

    def __init__(
        self,
        *,
        transport: MediaTransport,
        decoder: AudioDecoder,
        providers: ProviderFactory,
        responder: ResponseGenerator,
        settings: VoiceSettings,
    ) -> None:
        self._transport = transport
        self._decoder = decoder
        self._providers = providers
        self._responder = responder
        self.settings = settings
        self._sessions: dict[str, VoiceSession] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._transcriber: TranscriptionCapability | None = None
        self._synthesizer: SynthesisCapability | None = None

    def _lock(self, group_id: str) -> asyncio.Lock:
        lock = self._locks.get(group_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[group_id] = lock
        return lock

    def _ensure_providers(self) -> None:
        # ProviderAuthError surfaces here, on the first join.
        if self._transcriber is None:
            self._transcriber = self._providers.create_transcriber(self.settings.providers)
        if self._synthesizer is None:
            self._synthesizer = self._providers.create_synthesizer(self.settings.providers)

    def get(self, group_id: str) -> VoiceSession | None:
        return self._sessions.get(group_id)

    def sessions(self) -> list[VoiceSession]:
        return list(self._sessions.values())

    def snapshot(self) -> list[SessionSnapshot]:
        return [session.snapshot() for session in self._sessions.values()]

    async def join(self, group_id: str, channel_id: str) -> VoiceSession:
        async with self._lock(group_id):
            existing = self._sessions.get(group_id)
            if existing is not None:
                if existing.channel_id == channel_id:
                    return existing
                logger.info("switching group=%s from channel=%s to %s", group_id, existing.channel_id, channel_id)
                await self._release(group_id)

            self._ensure_providers()
            try:
                connection = await self._transport.join(group_id, channel_id)
            except JoinFailure:
                raise
            except Exception as exc:
                raise JoinFailure(
                    f"could not join channel {channel_id}: {exc}",
                    group_id=group_id,
                    channel_id=channel_id,
                ) from exc

            session = self._new_session(group_id, channel_id, connection)
            self._sessions[group_id] = session
            timeout_s = self.settings.heartbeat.join_timeout_ms / 1000.0
            try:
                await connection.wait_for_status("ready", timeout_s)
            except Exception as exc:
                self._sessions.pop(group_id, None)
                with contextlib.suppress(Exception):
                    connection.destroy()
                raise JoinTimeout(
                    f"voice connection to {channel_id} not ready after {timeout_s:.1f}s",
                    group_id=group_id,
                    channel_id=channel_id,
                    timeout_s=timeout_s,
                ) from exc

            session.start()
            logger.info("joined voice channel %s (group=%s)", channel_id, group_id)
            return session

    def _new_session(self, group_id: str, channel_id: str, connection: VoiceConnection) -> VoiceSession:
        providers = self.settings.providers
        transcription = TranscriptionPipeline(
            self._transcriber,
            streaming=providers.streaming_stt,
            sample_rate=self.settings.segmentation.sample_rate_hz,
            keepalive_s=providers.stream_keepalive_s,
        )
        return VoiceSession(
            group_id=group_id,
            channel_id=channel_id,
            connection=connection,
            decoder=self._decoder,
            transcription=transcription,
            synthesizer=self._synthesizer,
            responder=self._responder,
            settings=self.settings,
            on_failed=self._on_session_failed,
        )

    async def leave(self, group_id: str) -> bool:
        """Tear down the group's session; ``False`` when none was present."""
        async with self._lock(group_id):
            return await self._release(group_id)

    async def _release(self, group_id: str) -> bool:
        session = self._sessions.pop(group_id, None)
        if session is None:
            return False
        await session.close()
        logger.info("left voice channel %s (group=%s)", session.channel_id, group_id)
        return True

    async def speak(self, group_id: str, text: str) -> None:
        session = self._sessions.get(group_id)
        if session is None:
            raise SessionNotFound(f"no active voice session for group {group_id}", group_id=group_id)
        await session.speak(text)

    async def close_all(self) -> None:
        for group_id in list(self._sessions):
            try:
                await self.leave(group_id)
            except Exception:
                logger.exception("failed to close voice session (group=%s)", group_id)

    async def _on_session_failed(self, session: VoiceSession, error: TransportDisconnect) -> None:
        logger.warning("releasing session after transport failure: %s", error.message)
        async with self._lock(session.group_id):
            if self._sessions.get(session.group_id) is not session:
                return
            await self._release(session.group_id)


__all__ = ["SessionRegistry"]
