"""Tests for the speech-to-text client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from openai import APIConnectionError
from openai.types.audio import TranscriptionSegment

from transcriber.errors import TranscriptionError
from transcriber.services.audio import AudioPayload
from transcriber.services.transcription import transcribe_audio

AUDIO = AudioPayload(content=b"bytes", mime_type="audio/mpeg", filename="audio.mp3", url="https://h/a.mp3")


def _client(response=None, error=None):
    client = MagicMock()
    client.audio.transcriptions.create = AsyncMock(return_value=response, side_effect=error)
    return client


class TestTranscribeAudio:
    async def test_requests_verbose_segments(self):
        client = _client(SimpleNamespace(text="hi", segments=[], duration=1.5, language="en"))
        await transcribe_audio(client, AUDIO)

        kwargs = client.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "whisper-1"
        assert kwargs["file"] == ("audio.mp3", b"bytes", "audio/mpeg")
        assert kwargs["response_format"] == "verbose_json"
        assert kwargs["timestamp_granularities"] == ["segment"]

    async def test_maps_response(self):
        client = _client(SimpleNamespace(
            text="hello world",
            segments=[{"start": 0.0, "end": 1.2, "text": "hello"}, {"start": 1.2, "end": 2.0, "text": " world"}],
            duration=2.0,
            language="english",
        ))
        output = await transcribe_audio(client, AUDIO)
        assert output.text == "hello world"
        assert [s.text for s in output.segments] == ["hello", " world"]
        assert output.duration == 2.0
        assert output.language == "english"

    async def test_sdk_segments_pass_through_all_fields(self):
        segment = TranscriptionSegment(
            id=0, seek=0, start=0.0, end=3.5, text="Good morning",
            tokens=[1, 2, 3], temperature=0.0, avg_logprob=-0.2,
            compression_ratio=1.1, no_speech_prob=0.01,
        )
        client = _client(SimpleNamespace(text="Good morning", segments=[segment], duration=3.5, language="en"))
        output = await transcribe_audio(client, AUDIO)

        dumped = output.segments[0].model_dump()
        assert dumped["text"] == "Good morning"
        assert dumped["tokens"] == [1, 2, 3]
        assert dumped["avg_logprob"] == -0.2

    async def test_missing_optional_fields_defaulted(self):
        client = _client(SimpleNamespace(text="hi"))
        output = await transcribe_audio(client, AUDIO)
        assert output.segments == []
        assert output.duration == 0
        assert output.language == "en"

    async def test_none_optional_fields_defaulted(self):
        client = _client(SimpleNamespace(text="hi", segments=None, duration=None, language=None))
        output = await transcribe_audio(client, AUDIO)
        assert output.segments == []
        assert output.duration == 0
        assert output.language == "en"

    async def test_service_failure_wrapped(self):
        error = APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/audio/transcriptions"))
        client = _client(error=error)
        with pytest.raises(TranscriptionError, match="Connection error"):
            await transcribe_audio(client, AUDIO)
        assert client.audio.transcriptions.create.await_count == 1
