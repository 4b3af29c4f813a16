from __future__ import annotations

from functools import lru_cache

from modelhub.core.settings import Settings, get_settings
from modelhub.services.completion_service import (
    ChatCompletionService,
    SamplingParams,
    StreamingCompletionService,
    build_openai_client,
)
from modelhub.services.gemini_service import GeminiService
from modelhub.services.router import ProviderRegistry, ProviderRouter
from modelhub.services.vision_service import VisionService


def build_registry(settings: Settings) -> ProviderRegistry:
    return ProviderRegistry(
        gemini=GeminiService(api_key=settings.gemini_api_key),
        openai=ChatCompletionService(
            client=build_openai_client(settings.openai_api_key, settings.openai_base_url),
            params=SamplingParams(
                temperature=settings.openai_temperature,
                top_p=settings.openai_top_p,
                max_tokens=settings.openai_max_tokens,
            ),
            provider_name="openai",
        ),
        coder=StreamingCompletionService(
            client=build_openai_client(settings.hf_api_key, settings.hf_base_url),
            params=SamplingParams(
                temperature=settings.coder_temperature,
                top_p=settings.coder_top_p,
                max_tokens=settings.coder_max_tokens,
            ),
            provider_name="huggingface",
            upstream_model=settings.coder_upstream_model,
        ),
        default=ChatCompletionService(
            client=build_openai_client(settings.groq_api_key, settings.groq_base_url),
            params=SamplingParams(
                temperature=settings.groq_temperature,
                top_p=settings.groq_top_p,
                max_tokens=settings.groq_max_tokens,
            ),
            provider_name="groq",
        ),
        coder_model=settings.coder_model,
        backup_model=settings.backup_model,
    )


@lru_cache
def get_provider_registry() -> ProviderRegistry:
    return build_registry(get_settings())


@lru_cache
def get_provider_router() -> ProviderRouter:
    return ProviderRouter.from_registry(get_provider_registry())


@lru_cache
def get_vision_service() -> VisionService:
    settings = get_settings()
    return VisionService(
        client=build_openai_client(settings.groq_api_key, settings.groq_base_url),
        params=SamplingParams(
            temperature=settings.vision_temperature,
            top_p=settings.vision_top_p,
            max_tokens=settings.vision_max_tokens,
        ),
        model=settings.vision_model,
    )
