"""Meeting transcription endpoint.

POST an audio URL plus meeting metadata; the response carries the transcript,
timestamps, speaker labels and a meeting summary.
"""

import json
import logging

from fastapi import APIRouter, Request, Response

from transcriber.errors import TranscriberError
from transcriber.models.transcription import TranscriptionResult
from transcriber.services.pipeline import transcribe_meeting
from transcriber.services.validator import validate_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transcription"])


@router.options("/transcribe")
async def transcribe_preflight() -> Response:
    return Response(status_code=200)


@router.post("/transcribe", response_model=TranscriptionResult)
async def transcribe(request: Request):
    """Download, transcribe and summarize a meeting recording."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.info("Request body is not JSON, treating it as empty")
        payload = {}

    body = validate_request(payload)

    try:
        return await transcribe_meeting(body)
    except TranscriberError:
        raise
    except Exception as e:
        logger.exception("Unexpected transcription failure")
        raise TranscriberError(str(e)) from e
