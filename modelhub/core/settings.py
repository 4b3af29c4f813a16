from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = Field(default="Multi-Model Chat Gateway", alias="APP_NAME")
    environment: Literal["local", "dev", "staging", "prod"] = Field(
        default="local", alias="ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    cors_origin: str = Field(default="http://localhost:5173", alias="CORS_ORIGIN")

    # Credentials are only checked by the upstream SDK when a provider is used.
    groq_api_key: str | None = Field(default=None, alias="GROQ_API_KEY")
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "GITHUB_TOKEN"),
    )
    hf_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("HF_API_KEY", "HF_TOKEN"),
    )

    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1", alias="GROQ_BASE_URL"
    )
    openai_base_url: str = Field(
        default="https://models.inference.ai.azure.com", alias="OPENAI_BASE_URL"
    )
    hf_base_url: str = Field(
        default="https://router.huggingface.co/v1", alias="HF_BASE_URL"
    )

    coder_model: str = Field(default="Qwen2.5-Coder-32B-Instruct", alias="CODER_MODEL")
    coder_upstream_model: str = Field(
        default="Qwen/Qwen2.5-Coder-32B-Instruct", alias="CODER_UPSTREAM_MODEL"
    )
    vision_model: str = Field(
        default="llama-3.2-11b-vision-preview", alias="VISION_MODEL"
    )
    backup_model: str = Field(default="llama-3.1-8b-instant", alias="BACKUP_MODEL")

    # Sampling parameters are fixed per provider; callers cannot override them.
    openai_temperature: float = Field(default=1.0, alias="OPENAI_TEMPERATURE")
    openai_top_p: float = Field(default=1.0, alias="OPENAI_TOP_P")
    openai_max_tokens: int = Field(default=1024, alias="OPENAI_MAX_TOKENS")

    coder_temperature: float = Field(default=1.0, alias="CODER_TEMPERATURE")
    coder_top_p: float = Field(default=0.7, alias="CODER_TOP_P")
    coder_max_tokens: int = Field(default=1024, alias="CODER_MAX_TOKENS")

    groq_temperature: float = Field(default=1.0, alias="GROQ_TEMPERATURE")
    groq_top_p: float = Field(default=1.0, alias="GROQ_TOP_P")
    groq_max_tokens: int = Field(default=1024, alias="GROQ_MAX_TOKENS")

    vision_temperature: float = Field(default=1.0, alias="VISION_TEMPERATURE")
    vision_top_p: float = Field(default=1.0, alias="VISION_TOP_P")
    vision_max_tokens: int = Field(default=2048, alias="VISION_MAX_TOKENS")


class ClientSettings(BaseSettings):
    """Settings for the chat client that talks to the gateway over HTTP."""

    model_config = SettingsConfigDict(
        env_prefix="MODELHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    gateway_url: str = "http://localhost:3000"
    primary_route: str = "/api/chat"
    backup_route: str = "/api/chat/v2"
    timeout: float | None = None

    history_dir: str = "~/.modelhub"
    history_capacity: int = Field(default=10, ge=1)

    default_model: str = "Llama-3.1-8b-instant"
    system_prompt: str = ""


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
