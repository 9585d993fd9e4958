"""Speaker attribution and meeting summarization with a chat model.

With participant hints, the model rewrites the transcript with speaker labels
and returns per-speaker summaries as JSON. Without hints, it only writes a
short meeting summary.
"""

import json
import logging
import re

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from transcriber.config import ATTRIBUTION_MAX_TOKENS, SUMMARY_MAX_TOKENS
from transcriber.errors import AttributionError, AttributionParseError, SummarizationError
from transcriber.models.transcription import (
    AttributionAnalysis,
    AttributionOutcome,
    ParticipantHint,
)
from transcriber.services.llm import _strip_json, chat_completion

logger = logging.getLogger(__name__)

ATTRIBUTION_SYSTEM_PROMPT = (
    "You are an expert at analyzing meeting transcripts and identifying speakers. "
    "Always respond with valid JSON."
)

ATTRIBUTION_PROMPT = """You are analyzing a meeting transcript to identify speakers.

PARTICIPANTS IN THIS MEETING:
{participants}

TRANSCRIPT:
{transcript}

INSTRUCTIONS:
1. Analyze the transcript and identify which parts were likely spoken by each participant
2. Use the sample quotes (if provided) to help match speaking styles
3. Rewrite the transcript with speaker labels

OUTPUT FORMAT:
Return a JSON object with:
{{
  "transcript": "The full transcript with speaker labels like 'Speaker Name: text...'",
  "speakers": [
    {{
      "name": "Speaker Name",
      "wordCount": 123,
      "summary": "Brief 2-3 sentence summary of what they said"
    }}
  ],
  "meetingSummary": "Overall 3-4 sentence summary of the meeting"
}}"""

SUMMARY_SYSTEM_PROMPT = "Summarize this meeting transcript in 3-4 sentences."


def format_participants(participants: list[ParticipantHint]) -> str:
    """Render hints as a 1-indexed list with their sample quotes."""
    return "\n".join(
        f'{i + 1}. "{p.speaker}" - Sample quote: "{p.sample_quote or "Not provided"}"'
        for i, p in enumerate(participants)
    )


def build_attribution_prompt(participants: list[ParticipantHint], transcript: str) -> str:
    return ATTRIBUTION_PROMPT.format(
        participants=format_participants(participants),
        transcript=transcript,
    )


def _parse_word_count(value: object) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return max(0, int(value))
    match = re.search(r"\d+", str(value or "").replace(",", ""))
    return int(match.group(0)) if match else 0


def _coerce_speakers(value: object) -> list[dict] | None:
    if not isinstance(value, list):
        return None
    speakers = []
    for item in value:
        if isinstance(item, str):
            item = {"name": item}
        if not isinstance(item, dict):
            continue
        name = str(item.get("name") or "").strip()
        if not name:
            continue
        speakers.append({
            "name": name,
            "wordCount": _parse_word_count(item.get("wordCount")),
            "summary": str(item.get("summary") or ""),
        })
    return speakers


def _coerce_analysis(data: dict) -> dict:
    def _as_str(value: object) -> str | None:
        return value if isinstance(value, str) else None

    return {
        "transcript": _as_str(data.get("transcript")),
        "speakers": _coerce_speakers(data.get("speakers")),
        "meetingSummary": _as_str(data.get("meetingSummary")),
    }


def parse_analysis(raw: str) -> AttributionAnalysis:
    """Decode the model's attribution reply.

    Fields of the wrong type are dropped or tidied so the caller can fall back
    per field; nameless speaker entries are skipped.

    Raises:
        AttributionParseError: the reply is not a JSON object.
    """
    try:
        data = json.loads(_strip_json(raw))
    except json.JSONDecodeError as e:
        raise AttributionParseError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise AttributionParseError(f"Expected a JSON object, got {type(data).__name__}")
    try:
        return AttributionAnalysis.model_validate(_coerce_analysis(data))
    except ValidationError as e:
        raise AttributionParseError(str(e)) from e


async def attribute_speakers(
    client: AsyncOpenAI,
    transcript: str,
    participants: list[ParticipantHint],
    log: logging.LoggerAdapter | logging.Logger = logger,
) -> AttributionOutcome:
    """Label the transcript by speaker.

    A reply that cannot be parsed degrades to the unlabeled transcript; only a
    failed model call raises.
    """
    log.info("Matching %d speakers with chat model...", len(participants))
    try:
        raw = await chat_completion(
            client,
            system=ATTRIBUTION_SYSTEM_PROMPT,
            user=build_attribution_prompt(participants, transcript),
            max_tokens=ATTRIBUTION_MAX_TOKENS,
            json_output=True,
        )
    except OpenAIError as e:
        raise AttributionError(str(e)) from e

    try:
        analysis = parse_analysis(raw)
    except AttributionParseError as e:
        log.warning("Failed to parse attribution response: %s", e)
        return AttributionOutcome(transcript=transcript)

    return AttributionOutcome(
        transcript=analysis.transcript or transcript,
        speakers=analysis.speakers or [],
        meeting_summary=analysis.meeting_summary or "",
    )


async def summarize_meeting(
    client: AsyncOpenAI,
    transcript: str,
    log: logging.LoggerAdapter | logging.Logger = logger,
) -> AttributionOutcome:
    log.info("No participants provided, generating summary only...")
    try:
        summary = await chat_completion(
            client,
            system=SUMMARY_SYSTEM_PROMPT,
            user=transcript,
            max_tokens=SUMMARY_MAX_TOKENS,
        )
    except OpenAIError as e:
        raise SummarizationError(str(e)) from e
    return AttributionOutcome(transcript=transcript, meeting_summary=summary)
