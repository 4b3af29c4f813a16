from __future__ import annotations

import logging

from openai import AsyncOpenAI

from modelhub.services.completion_service import SamplingParams
from modelhub.services.streaming import NO_RESPONSE

logger = logging.getLogger(__name__)


class VisionService:
    """One multimodal request (text prompt + image URL) to the vision model."""

    def __init__(self, client: AsyncOpenAI | None, params: SamplingParams, model: str):
        self._client = client
        self._params = params
        self._model = model

    async def describe(self, prompt: str, image_url: str) -> str:
        if self._client is None:
            raise RuntimeError("GROQ_API_KEY is not configured")

        completion = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": image_url}},
                    ],
                }
            ],
            temperature=self._params.temperature,
            max_tokens=self._params.max_tokens,
            top_p=self._params.top_p,
            stream=False,
            stop=None,
        )
        content = completion.choices[0].message.content if completion.choices else None
        return content or NO_RESPONSE
