"""
FastAPI application entry point.

Run with: uvicorn place_aggregator.api.app:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from place_aggregator.api import routes
from place_aggregator.config import get_settings
from place_aggregator.exceptions import CallerError, ServerError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."


async def caller_error_handler(request: Request, exc: CallerError) -> JSONResponse:
    """Bad or missing input: echo the message to the client."""
    logger.info(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Upstream or internal failure: log it, answer with a generic message."""
    logger.error(f"Request to {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


def create_app() -> FastAPI:
    """Build the FastAPI application with its routes and error handlers."""
    settings = get_settings()
    app = FastAPI(
        title=settings.api.title,
        description="Aggregated points of interest from several geodata providers",
        version="0.1.0",
    )
    app.include_router(routes.router, prefix="/places", tags=["places"])
    app.add_exception_handler(CallerError, caller_error_handler)
    app.add_exception_handler(ServerError, server_error_handler)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "service": settings.api.title}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
