"""Summarizers for the event compaction example.

- keyword_summary: a local summarizer, no model needed
- OpenAICompatibleProvider: a minimal chat-completions provider over httpx,
  used when OPENAI_API_KEY is set
"""

import os

import httpx
from sessionfold import LLMProvider, LLMResponse, summarizer


@summarizer
def keyword_summary(events):
    """Keep the first few words of every turn."""
    lines = []
    for event in events:
        words = event.text.split()
        lines.append(f"{event.author}: {' '.join(words[:6])}")
    return "Earlier: " + " | ".join(lines)


class OpenAICompatibleProvider(LLMProvider):
    """Calls an OpenAI-compatible /chat/completions endpoint."""

    def __init__(self, api_key: str, base_url: str = "https://api.openai.com/v1"):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    async def generate(self, messages, model, temperature=None, max_tokens=None, **kwargs):
        body = {"model": model, "messages": messages}
        if temperature is not None:
            body["temperature"] = temperature
        if max_tokens is not None:
            body["max_tokens"] = max_tokens

        async with httpx.AsyncClient(timeout=60.0) as client:
            response = await client.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=body,
            )
            response.raise_for_status()
            data = response.json()

        choice = data["choices"][0]
        return LLMResponse(
            content=choice["message"].get("content"),
            usage=data.get("usage") or {},
            model=data.get("model"),
            stop_reason=choice.get("finish_reason"),
        )


def openai_provider_from_env():
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        return None
    return OpenAICompatibleProvider(
        api_key, base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    )
