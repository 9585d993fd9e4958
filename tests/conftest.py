import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# Deterministic config regardless of the developer's .env
os.environ["DIRECT_DOWNLOAD_HOSTS"] = "box.com"
os.environ["OPENAI_BASE_URL"] = ""

from transcriber.main import app


def chat_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.fixture
def make_openai():
    """Build a mock AsyncOpenAI client with canned transcription and chat replies."""

    def _make(
        text: str = "hello world",
        segments: list | None = None,
        duration: float | None = 5,
        language: str | None = "en",
        chat_replies: tuple = ("A short meeting summary.",),
    ) -> MagicMock:
        client = MagicMock()
        client.close = AsyncMock()
        client.audio.transcriptions.create = AsyncMock(
            return_value=SimpleNamespace(
                text=text,
                segments=segments if segments is not None else [],
                duration=duration,
                language=language,
            )
        )
        client.chat.completions.create = AsyncMock(
            side_effect=[
                reply if isinstance(reply, BaseException) else chat_response(reply)
                for reply in chat_replies
            ]
        )
        return client

    return _make


@pytest.fixture
def audio_server():
    """Mock transport serving audio bytes; records every requested URL."""

    class _Server:
        def __init__(self):
            self.requests: list[str] = []
            self.status = 200
            self.content = b"ID3\x03fake-audio-bytes"

        def handler(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(str(request.url))
            return httpx.Response(self.status, content=self.content)

        def client(self) -> httpx.AsyncClient:
            return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    return _Server()


@pytest.fixture
def client():
    """Provide a synchronous TestClient for HTTP endpoint tests."""
    return TestClient(app)


@pytest_asyncio.fixture
async def async_client():
    """Provide an async httpx client for async HTTP tests."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
