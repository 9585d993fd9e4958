import os

from dotenv import load_dotenv

load_dotenv()

# OpenAI models (the API key itself is supplied per request by the caller)
OPENAI_TRANSCRIPTION_MODEL = os.getenv("OPENAI_TRANSCRIPTION_MODEL", "whisper-1")
OPENAI_CHAT_MODEL = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "")

ATTRIBUTION_MAX_TOKENS = int(os.getenv("ATTRIBUTION_MAX_TOKENS", "4000"))
SUMMARY_MAX_TOKENS = int(os.getenv("SUMMARY_MAX_TOKENS", "500"))

# Audio download
DOWNLOAD_TIMEOUT_SECONDS = float(os.getenv("DOWNLOAD_TIMEOUT_SECONDS", "120"))
DIRECT_DOWNLOAD_HOSTS = [
    host.strip().lower()
    for host in os.getenv("DIRECT_DOWNLOAD_HOSTS", "box.com").split(",")
    if host.strip()
]

DEFAULT_MEETING_NAME = os.getenv("DEFAULT_MEETING_NAME", "Untitled Meeting")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
