"""
Gateway client with single-step fallback.

Each user turn makes at most two attempts: the primary chat route, then the
backup route with the identical payload. There is no backoff and no third try.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class GatewayRequestError(Exception):
    """A single gateway route failed (transport error, non-2xx, bad body)."""

    def __init__(self, route: str, reason: str):
        super().__init__(f"{route}: {reason}")
        self.route = route
        self.reason = reason


class BothRoutesFailedError(Exception):
    """Primary and backup routes both failed for the same payload."""

    def __init__(self, primary: GatewayRequestError, backup: GatewayRequestError):
        super().__init__(f"primary failed ({primary}); backup failed ({backup})")
        self.primary = primary
        self.backup = backup


class FallbackController:
    def __init__(
        self,
        http: httpx.AsyncClient,
        primary_route: str = "/api/chat",
        backup_route: str = "/api/chat/v2",
    ):
        self._http = http
        self._primary_route = primary_route
        self._backup_route = backup_route

    async def _post(self, route: str, payload: dict[str, Any]) -> str:
        try:
            response = await self._http.post(route, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise GatewayRequestError(
                route, f"HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, ValueError) as e:
            raise GatewayRequestError(route, str(e) or type(e).__name__) from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise GatewayRequestError(route, "response body has no 'response' text")
        return text

    async def fetch_reply(self, payload: dict[str, Any]) -> str:
        """
        Send the payload to the primary route, retrying once on the backup route.

        Raises:
            BothRoutesFailedError: if both attempts fail.
        """
        try:
            return await self._post(self._primary_route, payload)
        except GatewayRequestError as primary_error:
            logger.warning(
                "Error fetching primary model, trying backup route: %s", primary_error
            )
            try:
                return await self._post(self._backup_route, payload)
            except GatewayRequestError as backup_error:
                logger.error("Backup route failed: %s", backup_error)
                raise BothRoutesFailedError(primary_error, backup_error) from backup_error
