"""Builder Service - FastAPI entry point for the AI build pipeline."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
import structlog

from shared.logging import CORRELATION_HEADER, new_correlation_id, request_context, setup_logging

from . import __version__, routers
from .config import get_settings
from .database import get_engine
from .dependencies import get_gemini_provider

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings = get_settings()
    setup_logging(**settings.logging_options())
    yield
    # Shutdown
    await get_gemini_provider().close()
    await get_engine().dispose()


app = FastAPI(
    title="Playground Builder",
    description="Multi-agent AI build pipeline for playground projects",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Bind a correlation id for the request and log one line per response."""
    correlation_id = request.headers.get(CORRELATION_HEADER) or new_correlation_id()
    started = time.perf_counter()

    with request_context(correlation_id, request.method, request.url.path):
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "http_request_crashed",
                duration_ms=_elapsed_ms(started),
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise
        log = logger.error if response.status_code >= 500 else logger.info  # noqa: PLR2004
        log("http_request", status_code=response.status_code, duration_ms=_elapsed_ms(started))

    response.headers[CORRELATION_HEADER] = correlation_id
    return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


app.include_router(routers.health.router)
app.include_router(routers.agents.router, prefix="/api")
app.include_router(routers.projects.router, prefix="/api")
