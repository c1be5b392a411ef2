"""Per-speaker utterance accumulation with an exact length cutoff."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from channel_voice.state.audio import Utterance, HandoffReason

from .pcm import duration_ms, bytes_for_ms
from .silence_timer import SilenceTimer

if TYPE_CHECKING:
    from channel_voice.pipeline.streaming_transcriber import StreamingTranscriber


class RecordingBuffer:
    """Accumulates decoded PCM for one speaker between two hand-offs.

    The buffer is idle (not recording, empty) or active. The cutoff is derived
    from the accumulated byte count, never from wall-clock time.
    """

    def __init__(
        self,
        speaker_id: str,
        *,
        sample_rate: int,
        max_recording_ms: int,
        timer: SilenceTimer,
    ) -> None:
        self.speaker_id = speaker_id
        self.sample_rate = int(sample_rate)
        self.timer = timer
        self.stream: StreamingTranscriber | None = None
        self.recording: bool = False
        self.last_activity: float = 0.0
        self._max_bytes = max(2, bytes_for_ms(max_recording_ms, sample_rate))
        self._chunks: list[bytes] = []
        self._nbytes = 0

    @property
    def size_bytes(self) -> int:
        return self._nbytes

    @property
    def empty(self) -> bool:
        return self._nbytes == 0

    @property
    def at_cutoff(self) -> bool:
        return self._nbytes >= self._max_bytes

    @property
    def duration_ms(self) -> float:
        return duration_ms(self._nbytes, self.sample_rate)

    def open(self) -> None:
        self.recording = True
        self.touch()

    def touch(self) -> None:
        self.last_activity = time.monotonic()

    def append(self, chunk: bytes) -> tuple[bytes, bytes]:
        """Append ``chunk`` up to the cutoff; return ``(accepted, overflow)``."""
        self.touch()
        room = self._max_bytes - self._nbytes
        if room <= 0:
            return b"", bytes(chunk)
        accepted = bytes(chunk[:room])
        overflow = bytes(chunk[room:])
        if accepted:
            self._chunks.append(accepted)
            self._nbytes += len(accepted)
        return accepted, overflow

    def freeze(self, reason: HandoffReason) -> Utterance:
        """Snapshot the accumulated audio and return the buffer to idle."""
        pcm = b"".join(self._chunks)
        utterance = Utterance(
            speaker_id=self.speaker_id,
            pcm=pcm,
            sample_rate=self.sample_rate,
            duration_ms=duration_ms(len(pcm), self.sample_rate),
            reason=reason,
        )
        self.timer.cancel()
        self._chunks = []
        self._nbytes = 0
        self.recording = False
        return utterance

    def detach_stream(self) -> StreamingTranscriber | None:
        stream, self.stream = self.stream, None
        return stream


__all__ = ["RecordingBuffer"]
