"""Service-level exceptions rendered by the gateway as ``{"error": ...}`` bodies."""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception that carries the caller-facing message and HTTP status."""

    default_status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = (
            status_code if status_code is not None else self.default_status_code
        )


class ProviderUnavailableError(ServiceError):
    """The selected upstream provider failed; raw provider detail is not exposed."""

    default_status_code = 500
