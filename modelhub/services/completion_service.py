from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from openai import AsyncOpenAI

from modelhub.models.chat import ChatMessage
from modelhub.services.streaming import NO_RESPONSE, delta_fragments, drain_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamplingParams:
    temperature: float
    top_p: float
    max_tokens: int


def build_openai_client(api_key: str | None, base_url: str) -> AsyncOpenAI | None:
    # AsyncOpenAI refuses to start without a key; the missing key is reported
    # when the provider is actually called instead.
    if not api_key:
        return None
    return AsyncOpenAI(api_key=api_key, base_url=base_url)


def to_openai_messages(messages: list[ChatMessage]) -> list[dict[str, str]]:
    return [{"role": msg.role, "content": msg.content} for msg in messages]


class ChatCompletionService:
    """Non-streaming chat completion against an OpenAI-compatible endpoint."""

    def __init__(
        self,
        client: AsyncOpenAI | None,
        params: SamplingParams,
        provider_name: str,
        upstream_model: str | None = None,
    ):
        self._client = client
        self._params = params
        self.provider_name = provider_name
        self._upstream_model = upstream_model

    def _require_client(self) -> AsyncOpenAI:
        if self._client is None:
            raise RuntimeError(f"{self.provider_name} API key is not configured")
        return self._client

    async def generate_reply(self, messages: list[ChatMessage], model: str) -> str:
        client = self._require_client()
        upstream_model = self._upstream_model or model
        start_time = time.time()

        logger.debug(
            "%s request: model=%s, messages=%d",
            self.provider_name, upstream_model, len(messages),
        )

        completion = await client.chat.completions.create(
            model=upstream_model,
            messages=to_openai_messages(messages),
            temperature=self._params.temperature,
            top_p=self._params.top_p,
            max_tokens=self._params.max_tokens,
            stream=False,
        )

        latency_ms = int((time.time() - start_time) * 1000)
        content = completion.choices[0].message.content if completion.choices else None

        logger.debug(
            "%s response: latency=%dms, content_len=%d",
            self.provider_name, latency_ms, len(content or ""),
        )
        return content or NO_RESPONSE


class StreamingCompletionService(ChatCompletionService):
    """Streams the completion upstream and drains it before replying."""

    async def generate_reply(self, messages: list[ChatMessage], model: str) -> str:
        client = self._require_client()
        upstream_model = self._upstream_model or model

        logger.debug(
            "%s stream request: model=%s, messages=%d",
            self.provider_name, upstream_model, len(messages),
        )

        stream = await client.chat.completions.create(
            model=upstream_model,
            messages=to_openai_messages(messages),
            temperature=self._params.temperature,
            top_p=self._params.top_p,
            max_tokens=self._params.max_tokens,
            stream=True,
        )
        return await drain_text(delta_fragments(stream))
