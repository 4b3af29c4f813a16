from __future__ import annotations

import logging

from modelhub.core.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Loggers of the server and the provider SDKs; SDK request lines repeat what
# the router already reports, so they never go below WARNING.
SERVER_LOGGERS = ("uvicorn.error", "uvicorn.access")
SDK_LOGGERS = ("httpx", "openai", "google_genai")


def resolve_level(name: str | None) -> int:
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Settings) -> int:
    level = resolve_level(settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    for name in SERVER_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in SDK_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return level
