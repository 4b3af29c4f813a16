from modelhub.client.fallback import (
    BothRoutesFailedError,
    FallbackController,
    GatewayRequestError,
)
from modelhub.client.history import HistoryStore
from modelhub.client.session import BOTH_ROUTES_FAILED, ChatSession

__all__ = [
    "BOTH_ROUTES_FAILED",
    "BothRoutesFailedError",
    "ChatSession",
    "FallbackController",
    "GatewayRequestError",
    "HistoryStore",
]
