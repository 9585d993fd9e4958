import re

from openai import AsyncOpenAI

from transcriber.config import OPENAI_BASE_URL, OPENAI_CHAT_MODEL


def create_client(api_key: str) -> AsyncOpenAI:
    """Build an OpenAI client for one request, using the caller's key."""
    return AsyncOpenAI(api_key=api_key, base_url=OPENAI_BASE_URL or None)


def _strip_json(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\s*", "", text)
        text = re.sub(r"\s*```$", "", text)
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        return text[start:end + 1]
    return text


async def chat_completion(
    client: AsyncOpenAI,
    *,
    system: str,
    user: str,
    max_tokens: int,
    json_output: bool = False,
    model: str | None = None,
) -> str:
    """Run a single system+user chat completion and return the reply text.

    OpenAI errors propagate to the caller, which decides how to wrap them.
    """
    kwargs = {}
    if json_output:
        kwargs["response_format"] = {"type": "json_object"}

    response = await client.chat.completions.create(
        model=model or OPENAI_CHAT_MODEL,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        max_tokens=max_tokens,
        **kwargs,
    )
    return response.choices[0].message.content or ""
