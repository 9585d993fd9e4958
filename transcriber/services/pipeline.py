"""Download → transcribe → attribute/summarize, one step after another."""

import logging
import uuid
from contextlib import AsyncExitStack

import httpx
from openai import AsyncOpenAI

from transcriber.config import DEFAULT_MEETING_NAME
from transcriber.models.transcription import TranscriptionRequest, TranscriptionResult
from transcriber.services import audio, llm
from transcriber.services.attribution import attribute_speakers, summarize_meeting
from transcriber.services.transcription import transcribe_audio

logger = logging.getLogger(__name__)


class RequestLogAdapter(logging.LoggerAdapter):
    """Prefixes messages with the request id and meeting name."""

    def process(self, msg, kwargs):
        return f"[{self.extra['request_id']}] [{self.extra['meeting']}] {msg}", kwargs


def request_logger(meeting_name: str) -> RequestLogAdapter:
    return RequestLogAdapter(logger, {"request_id": uuid.uuid4().hex[:8], "meeting": meeting_name})


async def transcribe_meeting(
    request: TranscriptionRequest,
    *,
    http_client: httpx.AsyncClient | None = None,
    openai_client: AsyncOpenAI | None = None,
) -> TranscriptionResult:
    """Run the whole pipeline for one validated request.

    Errors from any step propagate; there are no partial results.
    """
    meeting_name = request.meeting_name or DEFAULT_MEETING_NAME
    log = request_logger(meeting_name)
    log.info("Starting transcription for audio URL: %s", request.audio_url)

    # Only clients created here are closed here; injected ones belong to the caller
    async with AsyncExitStack() as stack:
        http = http_client
        if http is None:
            http = await stack.enter_async_context(audio.create_http_client())
        payload = await audio.fetch_audio(request.audio_url, http, log=log)

    async with AsyncExitStack() as stack:
        client = openai_client
        if client is None:
            client = llm.create_client(request.credential)
            stack.push_async_callback(client.close)

        transcription = await transcribe_audio(client, payload, log=log)
        if request.participants:
            outcome = await attribute_speakers(client, transcription.text, request.participants, log=log)
        else:
            outcome = await summarize_meeting(client, transcription.text, log=log)

    log.info("Processing complete")
    return TranscriptionResult(
        meeting_name=meeting_name,
        transcript=outcome.transcript,
        raw_transcript=transcription.text,
        segments=transcription.segments,
        speakers=outcome.speakers,
        meeting_summary=outcome.meeting_summary,
        duration=transcription.duration,
        language=transcription.language,
    )
