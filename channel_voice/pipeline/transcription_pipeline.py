"""Utterance to text: streaming channel first, batch as the fallback."""

from __future__ import annotations

import logging
from typing import Any

from channel_voice.state.audio import Utterance
from channel_voice.errors import ProviderRequestError
from channel_voice.state.results import TranscriptResult
from channel_voice.providers.credentials import supports_streaming

from .streaming_transcriber import StreamingTranscriber

logger = logging.getLogger(__name__)


class TranscriptionPipeline:
    def __init__(
        self,
        transcriber: Any,
        *,
        streaming: bool,
        sample_rate: int,
        keepalive_s: float,
    ) -> None:
        self._transcriber = transcriber
        self._streaming = bool(streaming) and supports_streaming(transcriber)
        self._sample_rate = int(sample_rate)
        self._keepalive_s = float(keepalive_s)

    @property
    def streaming(self) -> bool:
        return self._streaming

    def open_stream(self, speaker_id: str) -> StreamingTranscriber | None:
        if not self._streaming:
            return None
        stream = StreamingTranscriber(
            self._transcriber,
            speaker_id=speaker_id,
            sample_rate=self._sample_rate,
            keepalive_s=self._keepalive_s,
        )
        return stream.start()

    async def transcribe(
        self,
        utterance: Utterance,
        stream: StreamingTranscriber | None = None,
    ) -> TranscriptResult | None:
        """Return the transcript, or ``None`` when this utterance yields no text.

        Request failures drop the utterance; ``ProviderAuthError`` propagates.
        """
        if stream is not None:
            text = await stream.finish()
            if text is not None:
                return TranscriptResult(text=text) if text else None

        try:
            result = await self._transcriber.transcribe(utterance.pcm, utterance.sample_rate)
        except ProviderRequestError as exc:
            logger.warning(
                "transcription failed for speaker=%s (%s, status=%s); dropping utterance",
                utterance.speaker_id,
                exc.provider or "provider",
                exc.status,
            )
            return None

        if result is None or not (result.text or "").strip():
            logger.debug("empty transcript for speaker=%s", utterance.speaker_id)
            return None
        return result


__all__ = ["TranscriptionPipeline"]
