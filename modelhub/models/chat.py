from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    role: Role
    content: str


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list)
    model: str = ""


class ImageChatRequest(BaseModel):
    """Single text prompt plus an image reference for the vision model."""

    messages: str
    image_url: str


class ChatResponse(BaseModel):
    response: str


class ErrorResponse(BaseModel):
    error: str
