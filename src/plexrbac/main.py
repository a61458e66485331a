from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from plexrbac.config import Settings, settings
from plexrbac.db.session import create_tables, shutdown
from plexrbac.dependencies import DB, AppSettings
from plexrbac.exceptions import DomainError, ErrorKind
from plexrbac.logging import get_logger
from plexrbac.middleware import REQUEST_ID_HEADER, RequestIDMiddleware
from plexrbac.routers.realm import router as realm_router
from plexrbac.schemas.error import ErrorDetail, ErrorResponse
from plexrbac.tracing import TraceCapturer, configure_trace_capture, select_capturer

logger = get_logger(__name__)

# kind -> (status, envelope code)
ERROR_RESPONSES: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.NOT_FOUND: (404, "not_found"),
    ErrorKind.CONFLICT: (409, "conflict"),
    ErrorKind.PERSISTENCE: (500, "persistence_error"),
    ErrorKind.DOMAIN: (400, "domain_error"),
}


async def configure_app(config: Settings) -> TraceCapturer:
    """Install the trace capturer named by TRACE_CAPTURE; create tables in development."""
    capturer = select_capturer(config.trace_capture)
    configure_trace_capture(capturer)
    if config.environment == "development":
        await create_tables()
    logger.info(
        "application_started",
        version=config.app_version,
        environment=config.environment,
        trace_capturer=type(capturer).__name__,
    )
    return capturer


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: configure_app(settings). Shutdown: close database connections."""
    await configure_app(settings)
    yield
    await shutdown()
    logger.info("application_stopped")


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.include_router(realm_router)


def _error_json(code: str, message: str) -> dict[str, object]:
    """Build the standard error envelope as a dict for JSONResponse."""
    return ErrorResponse(error=ErrorDetail(code=code, message=message)).model_dump()


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate a domain error into its status code by dispatching on ``kind``.

    Persistence failures are logged with their captured stack; the stack never
    reaches the client.
    """
    status_code, code = ERROR_RESPONSES.get(exc.kind, ERROR_RESPONSES[ErrorKind.DOMAIN])
    if exc.kind is ErrorKind.PERSISTENCE:
        logger.error(code, error=exc, path=request.url.path, method=request.method)
    elif exc.kind is not ErrorKind.NOT_FOUND:
        logger.warning(code, error=exc.message, path=request.url.path)
    return JSONResponse(status_code=status_code, content=_error_json(code, exc.message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response.

    - Logs full exception with traceback (includes request_id from context)
    - Returns generic error to client (no stack traces leaked)
    - Echoes X-Request-ID, since this runs outside RequestIDMiddleware
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
        headers={REQUEST_ID_HEADER: request_id} if request_id else None,
    )


@app.get("/health")
async def health(db: DB, config: AppSettings) -> dict[str, str]:
    """Health check: 200 only if the database answers a ping query."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok", "name": config.app_name, "version": config.app_version}


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured host/port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
