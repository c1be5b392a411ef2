"""Per-channel voice session: one actor task owns all buffer and timer state."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable, Coroutine

from channel_voice.audio.pcm import is_voiced
from channel_voice.errors import TransportDisconnect
from channel_voice.state.settings import VoiceSettings
from channel_voice.transport.codec import AudioDecoder
from channel_voice.audio.silence_timer import SilenceTimer
from channel_voice.state.audio import Utterance, HandoffReason
from channel_voice.transport.connection import VoiceConnection
from channel_voice.pipeline.playback import PlaybackController
from channel_voice.providers.responder import ResponseGenerator
from channel_voice.audio.recording_buffer import RecordingBuffer
from channel_voice.providers.synthesis import SynthesisCapability
from channel_voice.state.snapshot import SessionPhase, SessionSnapshot
from channel_voice.pipeline.thinking_overlay import StopHandle, ThinkingOverlay
from channel_voice.pipeline.transcription_pipeline import TranscriptionPipeline
from channel_voice.state.events import AudioChunk, SpeechEnded, SessionEvent, SpeechStarted, SilenceElapsed

from .turn import run_turn
from .heartbeat import HeartbeatMonitor
from .speaker_receiver import SpeakerReceiver

logger = logging.getLogger(__name__)

SessionFailureCallback = Callable[["VoiceSession", TransportDisconnect], Awaitable[None]]


class VoiceSession:
    """Transport callbacks become mailbox messages processed in arrival order.

    Turns (transcribe -> respond -> speak) run as separate tasks so the actor
    never blocks on a provider.
    """

    def __init__(
        self,
        *,
        group_id: str,
        channel_id: str,
        connection: VoiceConnection,
        decoder: AudioDecoder,
        transcription: TranscriptionPipeline,
        synthesizer: SynthesisCapability,
        responder: ResponseGenerator,
        settings: VoiceSettings,
        on_failed: SessionFailureCallback | None = None,
    ) -> None:
        self.group_id = group_id
        self.channel_id = channel_id
        self.connection = connection
        self.settings = settings
        self.transcription = transcription
        self.responder = responder
        self.phase: SessionPhase = "joining"
        self.player = connection.create_player()
        connection.subscribe(self.player)
        self.playback = PlaybackController(self.player, synthesizer, on_change=self._on_speaking_change)
        self.overlay = ThinkingOverlay(settings.overlay)
        self.heartbeat = HeartbeatMonitor(
            connection,
            settings.heartbeat,
            group_id=group_id,
            on_failed=self._on_transport_failed,
        )
        self._decoder = decoder
        self._on_failed = on_failed
        self._buffers: dict[str, RecordingBuffer] = {}
        self._receivers: dict[str, SpeakerReceiver] = {}
        self._tasks: set[asyncio.Task] = set()
        self._overlay_stop: StopHandle | None = None
        self._thinkers: set[object] = set()
        self._mailbox: asyncio.Queue[SessionEvent] = asyncio.Queue()
        self._actor: asyncio.Task | None = None
        self._handlers: dict[type, Callable[[Any], None]] = {
            SpeechStarted: self._handle_speech_start,
            SpeechEnded: self._handle_speech_end,
            AudioChunk: self._handle_chunk,
            SilenceElapsed: self._handle_silence,
        }

    @property
    def speaking(self) -> bool:
        return self.playback.speaking

    def start(self) -> None:
        if self._actor is not None:
            return
        self.connection.on_speaking(self.on_speech_start, self.on_speech_end)
        self._actor = asyncio.create_task(self._run())
        self.heartbeat.start()
        self.phase = "active"

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            group_id=self.group_id,
            channel_id=self.channel_id,
            phase=self.phase,
            speaking=self.speaking,
            connection_status=str(self.connection.status),
            heartbeat_phase=self.heartbeat.state.phase,
            consecutive_failures=self.heartbeat.state.consecutive_failures,
            active_speakers=tuple(sorted(s for s, b in self._buffers.items() if b.recording)),
            pending_turns=len(self._tasks),
        )

    # Transport callbacks.
    def on_speech_start(self, speaker_id: str) -> None:
        self._post(SpeechStarted(speaker_id))

    def on_speech_end(self, speaker_id: str) -> None:
        self._post(SpeechEnded(speaker_id))

    def on_audio_chunk(self, speaker_id: str, pcm: bytes) -> None:
        self._post(AudioChunk(speaker_id, pcm))

    async def drain(self) -> None:
        """Wait until every posted message has been handled."""
        await self._mailbox.join()

    def _post(self, event: SessionEvent) -> None:
        if self.phase == "leaving":
            return
        self._mailbox.put_nowait(event)

    async def _run(self) -> None:
        try:
            while True:
                event = await self._mailbox.get()
                try:
                    self._handlers[type(event)](event)
                except Exception:
                    logger.exception("session event handling failed (group=%s event=%r)", self.group_id, event)
                finally:
                    self._mailbox.task_done()
        except asyncio.CancelledError:
            return

    def _handle_speech_start(self, event: SpeechStarted) -> None:
        speaker_id = event.speaker_id
        if not self.settings.is_allowed(speaker_id) or not self._admit(speaker_id):
            return
        buffer = self._buffer(speaker_id)
        buffer.timer.cancel()
        if not buffer.recording:
            self._activate(buffer)
        self._ensure_receiver(speaker_id)

    def _handle_speech_end(self, event: SpeechEnded) -> None:
        buffer = self._buffers.get(event.speaker_id)
        if buffer is None or not buffer.recording:
            return
        buffer.timer.schedule()

    def _handle_chunk(self, event: AudioChunk) -> None:
        speaker_id = event.speaker_id
        if not self.settings.is_allowed(speaker_id):
            return
        voiced = is_voiced(event.pcm, self.settings.segmentation.vad_threshold)
        buffer = self._buffers.get(speaker_id)
        if buffer is None or not buffer.recording:
            if not voiced or not self._admit(speaker_id):
                return
            buffer = self._buffer(speaker_id)
            self._activate(buffer)
        self._append(buffer, event.pcm, voiced)

    def _handle_silence(self, event: SilenceElapsed) -> None:
        buffer = self._buffers.get(event.speaker_id)
        if buffer is None or not buffer.recording or not buffer.timer.is_current(event.generation):
            return
        if buffer.empty:
            buffer.recording = False
            self._release_stream(buffer)
            return
        self._flush(buffer, "silence")

    def _admit(self, speaker_id: str) -> bool:
        """Barge-in gate for a speaker about to open a buffer."""
        if not self.playback.speaking:
            return True
        if not self.settings.barge_in:
            logger.debug("ignoring speaker=%s while speaking (barge-in disabled)", speaker_id)
            return False
        logger.info("barge-in from speaker=%s; stopping playback (group=%s)", speaker_id, self.group_id)
        self.playback.stop()
        return True

    def _buffer(self, speaker_id: str) -> RecordingBuffer:
        buffer = self._buffers.get(speaker_id)
        if buffer is None:
            segmentation = self.settings.segmentation
            timer = SilenceTimer(
                segmentation.silence_threshold_ms / 1000.0,
                lambda generation: self._post(SilenceElapsed(speaker_id, generation)),
            )
            buffer = RecordingBuffer(
                speaker_id,
                sample_rate=segmentation.sample_rate_hz,
                max_recording_ms=segmentation.max_recording_ms,
                timer=timer,
            )
            self._buffers[speaker_id] = buffer
        return buffer

    def _activate(self, buffer: RecordingBuffer) -> None:
        buffer.open()
        buffer.stream = self.transcription.open_stream(buffer.speaker_id)
        logger.debug("recording speaker=%s (group=%s)", buffer.speaker_id, self.group_id)

    def _append(self, buffer: RecordingBuffer, pcm: bytes, voiced: bool) -> None:
        accepted, overflow = buffer.append(pcm)
        if accepted and buffer.stream is not None:
            buffer.stream.push(accepted)
        if buffer.at_cutoff:
            # The cutoff is handled before any silence message can be, so it wins ties.
            self._flush(buffer, "cutoff")
            self._activate(buffer)
            if overflow:
                self._append(buffer, overflow, voiced)
            else:
                buffer.timer.schedule()
            return
        if voiced:
            buffer.timer.schedule()

    def _flush(self, buffer: RecordingBuffer, reason: HandoffReason) -> None:
        stream = buffer.detach_stream()
        utterance: Utterance = buffer.freeze(reason)
        if not utterance.pcm or utterance.duration_ms < self.settings.segmentation.min_audio_ms:
            logger.debug(
                "discarding %.0fms utterance from speaker=%s (min=%dms)",
                utterance.duration_ms,
                utterance.speaker_id,
                self.settings.segmentation.min_audio_ms,
            )
            if stream is not None:
                self._spawn(stream.abort())
            return
        self._spawn(run_turn(self, utterance, stream))

    def _release_stream(self, buffer: RecordingBuffer) -> None:
        stream = buffer.detach_stream()
        if stream is not None:
            self._spawn(stream.abort())

    def _ensure_receiver(self, speaker_id: str) -> None:
        receiver = self._receivers.get(speaker_id)
        if receiver is not None and receiver.active:
            return
        receiver = SpeakerReceiver(speaker_id, self.connection.receive(speaker_id), self._decoder, self.on_audio_chunk)
        self._receivers[speaker_id] = receiver
        receiver.start()

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def start_thinking(self) -> StopHandle:
        """Hold the cue for one pending turn; the returned handle releases it.

        The cue keeps looping until the last pending turn lets go.
        """
        token = object()
        if self.phase != "leaving":
            self._thinkers.add(token)
            self._resume_thinking()

        def _release() -> None:
            if token in self._thinkers:
                self._thinkers.discard(token)
                if not self._thinkers:
                    self.stop_thinking()

        return _release

    def _resume_thinking(self) -> None:
        if self._overlay_stop is None and self._thinkers and not self.speaking and self.phase != "leaving":
            self._overlay_stop = self.overlay.start(self.connection, self.player)

    def stop_thinking(self) -> None:
        """Halt the cue now; turns still pending resume it after playback."""
        handle, self._overlay_stop = self._overlay_stop, None
        if handle is not None:
            handle()

    async def speak(self, text: str) -> None:
        self.stop_thinking()
        try:
            await self.playback.speak(text)
        finally:
            self._resume_thinking()

    async def close(self) -> None:
        if self.phase == "leaving":
            return
        self.phase = "leaving"
        current = asyncio.current_task()
        if self._actor is not None and self._actor is not current:
            self._actor.cancel()
            await asyncio.wait({self._actor})
        self._actor = None

        buffers = list(self._buffers.values())
        self._buffers.clear()
        for buffer in buffers:
            buffer.timer.cancel()
            stream = buffer.detach_stream()
            if stream is not None:
                await stream.abort()
        self.playback.stop()
        self._thinkers.clear()
        self.stop_thinking()

        tasks = [t for t in self._tasks if t is not current]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.wait(tasks)
        for receiver in list(self._receivers.values()):
            await receiver.stop()
        self._receivers.clear()
        await self.heartbeat.stop()
        await self.playback.close()
        with contextlib.suppress(Exception):
            self.connection.destroy()
        logger.info("voice session closed (group=%s channel=%s)", self.group_id, self.channel_id)

    async def _on_transport_failed(self, error: TransportDisconnect) -> None:
        if self._on_failed is not None:
            await self._on_failed(self, error)
        else:
            await self.close()

    def _on_speaking_change(self, speaking: bool) -> None:
        logger.debug("speaking=%s (group=%s)", speaking, self.group_id)


__all__ = ["SessionFailureCallback", "VoiceSession"]
