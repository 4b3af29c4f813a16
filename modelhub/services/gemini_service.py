from __future__ import annotations

import asyncio
import logging

from google import genai

from modelhub.models.chat import ChatMessage

logger = logging.getLogger(__name__)


def flatten_prompt(messages: list[ChatMessage]) -> str:
    """Gemini gets one prompt string; roles are dropped."""
    return "\n".join(msg.content for msg in messages)


class GeminiService:
    provider_name = "gemini"

    def __init__(self, api_key: str | None):
        # Ref: https://pypi.org/project/google-genai/
        self._client = genai.Client(api_key=api_key) if api_key else None

    async def generate_reply(self, messages: list[ChatMessage], model: str) -> str:
        if self._client is None:
            raise RuntimeError("GEMINI_API_KEY is not configured")

        client = self._client
        prompt = flatten_prompt(messages)

        def _send() -> str:
            response = client.models.generate_content(model=model, contents=prompt)

            # `.text` is None when the candidate carries no text parts.
            return response.text or ""

        logger.debug("gemini request: model=%s, prompt_len=%d", model, len(prompt))
        return await asyncio.to_thread(_send)
