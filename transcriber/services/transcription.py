"""Speech-to-text via the OpenAI transcription endpoint (Whisper)."""

import logging

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel

from transcriber.config import OPENAI_TRANSCRIPTION_MODEL
from transcriber.errors import TranscriptionError
from transcriber.models.transcription import Segment, TranscriptionOutput
from transcriber.services.audio import AudioPayload

logger = logging.getLogger(__name__)


def _as_dict(item: object) -> object:
    if isinstance(item, BaseModel):
        return item.model_dump()
    return item


async def transcribe_audio(
    client: AsyncOpenAI,
    audio: AudioPayload,
    log: logging.LoggerAdapter | logging.Logger = logger,
) -> TranscriptionOutput:
    """Transcribe ``audio`` with segment-level timestamps.

    Single attempt; any OpenAI failure is raised as ``TranscriptionError``
    with the service's message.
    """
    log.info("Sending %s to OpenAI transcription (%s)...", audio.filename, OPENAI_TRANSCRIPTION_MODEL)
    try:
        response = await client.audio.transcriptions.create(
            model=OPENAI_TRANSCRIPTION_MODEL,
            file=(audio.filename, audio.content, audio.mime_type),
            response_format="verbose_json",
            timestamp_granularities=["segment"],
        )
    except OpenAIError as e:
        raise TranscriptionError(str(e)) from e

    segments = [
        Segment.model_validate(_as_dict(seg))
        for seg in getattr(response, "segments", None) or []
    ]
    output = TranscriptionOutput(
        text=response.text or "",
        segments=segments,
        duration=getattr(response, "duration", None) or 0,
        language=getattr(response, "language", None) or "en",
    )
    log.info("Transcription complete, segments: %d", len(output.segments))
    return output
