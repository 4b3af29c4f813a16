import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from modelhub.api import chat, health
from modelhub.core.exceptions import ServiceError
from modelhub.core.logging import configure_logging
from modelhub.core.settings import get_settings

logger = logging.getLogger(__name__)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Only field locations are reported; the rejected input is not echoed back.
    fields = sorted(
        {
            ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            for error in exc.errors()
        }
    )
    named = ", ".join(field for field in fields if field) or "body"
    logger.info("Rejected request to %s: invalid fields=%s", request.url.path, named)
    return JSONResponse(
        status_code=422,
        content={"error": f"Invalid request body: {named}"},
    )


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(chat.router, prefix="/api")

    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("Server is running on http://localhost:%d", settings.port)
    uvicorn.run("modelhub.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
