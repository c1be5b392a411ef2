"""One conversational turn: transcript -> response -> speech."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from channel_voice.state.audio import Utterance
from channel_voice.errors import ProviderRequestError

if TYPE_CHECKING:
    from channel_voice.session.voice_session import VoiceSession
    from channel_voice.pipeline.streaming_transcriber import StreamingTranscriber

logger = logging.getLogger(__name__)


async def run_turn(
    session: VoiceSession,
    utterance: Utterance,
    stream: StreamingTranscriber | None = None,
) -> None:
    """Run one turn; provider failures drop this turn and leave the session listening."""
    try:
        transcript = await session.transcription.transcribe(utterance, stream)
        if transcript is None:
            return
        logger.info(
            "transcript speaker=%s duration=%.0fms reason=%s: %r",
            utterance.speaker_id,
            utterance.duration_ms,
            utterance.reason,
            transcript.text,
        )

        stop_thinking = session.start_thinking()
        try:
            reply = await session.responder.respond(
                utterance.speaker_id,
                session.group_id,
                session.channel_id,
                transcript.text,
            )
            delay_ms = session.settings.overlay.stop_delay_ms
            if delay_ms > 0:
                await asyncio.sleep(delay_ms / 1000.0)
        finally:
            stop_thinking()

        reply = (reply or "").strip()
        if not reply:
            logger.debug("empty response for speaker=%s; nothing to say", utterance.speaker_id)
            return
        await session.speak(reply)
    except asyncio.CancelledError:
        raise
    except ProviderRequestError as exc:
        logger.warning("turn dropped for speaker=%s: %s", utterance.speaker_id, exc.message)
    except Exception:
        logger.exception("turn failed for speaker=%s", utterance.speaker_id)


__all__ = ["run_turn"]
