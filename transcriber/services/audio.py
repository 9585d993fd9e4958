"""Audio resolution: URL rewrites, type inference and download.

Both the URL rewrites and the extension table are ordered rule lists so a new
storage provider or audio format is a new entry, not a new branch.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from urllib.parse import urlparse

import httpx

from transcriber.config import DIRECT_DOWNLOAD_HOSTS, DOWNLOAD_TIMEOUT_SECONDS
from transcriber.errors import DownloadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UrlRewriteRule:
    """Applies ``transform`` to URLs whose host contains ``host_signature``."""

    host_signature: str
    transform: Callable[[str], str]

    def matches(self, url: str) -> bool:
        host = (urlparse(url).hostname or "").lower()
        return self.host_signature in host


@dataclass(frozen=True)
class AudioType:
    extension: str
    mime_type: str
    filename: str


@dataclass(frozen=True)
class AudioPayload:
    content: bytes
    mime_type: str
    filename: str
    url: str

    @property
    def size(self) -> int:
        return len(self.content)


def add_direct_download(url: str) -> str:
    """Ask the storage provider for raw bytes instead of its viewer page."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}directDownload=true"


URL_REWRITE_RULES: list[UrlRewriteRule] = [
    UrlRewriteRule(host_signature=host, transform=add_direct_download)
    for host in DIRECT_DOWNLOAD_HOSTS
]

# First match wins, so order matters for URLs containing several extensions
AUDIO_TYPES: list[AudioType] = [
    AudioType(".mp3", "audio/mpeg", "audio.mp3"),
    AudioType(".wav", "audio/wav", "audio.wav"),
    AudioType(".m4a", "audio/mp4", "audio.m4a"),
    AudioType(".mp4", "audio/mp4", "audio.mp4"),
    AudioType(".ogg", "audio/ogg", "audio.ogg"),
    AudioType(".webm", "audio/webm", "audio.webm"),
]

# Voice-memo recordings are m4a, which is what most unlabeled links turn out to be
DEFAULT_AUDIO_TYPE = AudioType(".m4a", "audio/mp4", "audio.m4a")


def resolve_download_url(url: str, rules: Sequence[UrlRewriteRule] | None = None) -> str:
    """Apply the first matching rewrite rule, if any."""
    for rule in URL_REWRITE_RULES if rules is None else rules:
        if rule.matches(url):
            return rule.transform(url)
    return url


def infer_audio_type(url: str, table: Sequence[AudioType] | None = None) -> AudioType:
    """Guess the audio type from extension substrings in the URL.

    This is a URL heuristic only; the file content is never inspected.
    """
    lowered = url.lower()
    for audio_type in AUDIO_TYPES if table is None else table:
        if audio_type.extension in lowered:
            return audio_type
    return DEFAULT_AUDIO_TYPE


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=DOWNLOAD_TIMEOUT_SECONDS, follow_redirects=True)


async def fetch_audio(
    url: str,
    client: httpx.AsyncClient,
    log: logging.LoggerAdapter | logging.Logger = logger,
) -> AudioPayload:
    """Download the audio at ``url`` into memory.

    Raises:
        DownloadError: on a non-2xx response or a transport failure.
    """
    fetch_url = resolve_download_url(url)
    if fetch_url != url:
        log.info("Rewrote audio URL for direct download: %s", fetch_url)

    try:
        resp = await client.get(fetch_url)
    except httpx.HTTPError as e:
        raise DownloadError(f"Failed to download audio file: {e}") from e

    if not resp.is_success:
        raise DownloadError.from_response(resp.status_code, resp.reason_phrase)

    audio_type = infer_audio_type(url)
    payload = AudioPayload(
        content=resp.content,
        mime_type=audio_type.mime_type,
        filename=audio_type.filename,
        url=fetch_url,
    )
    log.info(
        "Audio file downloaded, size: %d bytes, type: %s",
        payload.size, payload.mime_type,
    )
    return payload
