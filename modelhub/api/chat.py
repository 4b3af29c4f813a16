import logging

from fastapi import APIRouter, Depends

from modelhub.core.exceptions import ProviderUnavailableError
from modelhub.dependencies import get_provider_router, get_vision_service
from modelhub.models.chat import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    ImageChatRequest,
)
from modelhub.services.router import ProviderRouter
from modelhub.services.vision_service import VisionService

logger = logging.getLogger(__name__)

router = APIRouter()

IMAGE_UNREACHABLE = (
    "Image-based model is currently unreachable. "
    "Please try again later or use a different model."
)

_ERROR_RESPONSES = {500: {"model": ErrorResponse}}


@router.post("/chat", response_model=ChatResponse, responses=_ERROR_RESPONSES)
async def chat_endpoint(
    request: ChatRequest,
    provider_router: ProviderRouter = Depends(get_provider_router),
) -> ChatResponse:
    response_text = await provider_router.generate_reply(
        messages=request.messages,
        model=request.model,
    )
    return ChatResponse(response=response_text)


@router.post("/chat/v2", response_model=ChatResponse, responses=_ERROR_RESPONSES)
async def backup_chat_endpoint(
    request: ChatRequest,
    provider_router: ProviderRouter = Depends(get_provider_router),
) -> ChatResponse:
    """Backup route the client falls back to; always served by the default provider."""
    response_text = await provider_router.generate_backup_reply(
        messages=request.messages,
        model=request.model,
    )
    return ChatResponse(response=response_text)


@router.post("/chat/v3", response_model=ChatResponse, responses=_ERROR_RESPONSES)
async def image_chat_endpoint(
    request: ImageChatRequest,
    vision_service: VisionService = Depends(get_vision_service),
) -> ChatResponse:
    try:
        response_text = await vision_service.describe(
            prompt=request.messages,
            image_url=request.image_url,
        )
        return ChatResponse(response=response_text)
    except Exception as e:
        logger.exception("Image chat endpoint failed")
        raise ProviderUnavailableError(IMAGE_UNREACHABLE) from e
