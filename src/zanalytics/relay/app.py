"""HTTP relay exposing a few read-only Zoho Analytics calls to browser clients.

The relay holds the OAuth credentials server-side, so front-end code can fetch a
report or dashboard without ever seeing a token. Every upstream call goes
through the shared :class:`~zanalytics.http_client.AnalyticsHttpClient`, so the
refresh-and-retry rule applies exactly as it does for library callers.
"""

from __future__ import annotations

import logging
import secrets
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from ..clients import AnalyticsClient
from ..config import CLIENT_VERSION, configure_logging
from ..errors import ConfigError, ValidationError, ZAnalyticsError
from .rate_limit import build_limiter, rate_limit_exceeded_handler
from .settings import RelaySettings

logger = logging.getLogger(__name__)

LEGACY_PREFIX = "/zoho-analytics"
CORS_METHODS = ["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"]
CORS_HEADERS = ["Content-Type", "Authorization"]

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with a short correlation id."""

    async def dispatch(self, request: Request, call_next):
        request_id = secrets.token_hex(8)
        logger.info("[%s] %s %s started", request_id, request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("[%s] %s %s failed", request_id, request.method, request.url.path)
            raise
        logger.info(
            "[%s] %s %s completed status=%s",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
        )
        return response


def _client(request: Request) -> AnalyticsClient:
    return request.app.state.client


async def _read_body(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


async def fetch_report(request: Request) -> Any:
    body = await _read_body(request)
    workspace_id = _text(body.get("workspaceId"))
    view_id = _text(body.get("viewId"))
    if not workspace_id or not view_id:
        return JSONResponse(
            status_code=400, content={"error": "Missing workspaceId or viewId in request."}
        )
    return await run_in_threadpool(_client(request).get_view, workspace_id, view_id)


async def fetch_dashboard(request: Request, dashboardId: str | None = None) -> Any:
    dashboard_id = _text(dashboardId)
    if not dashboard_id:
        return JSONResponse(status_code=400, content={"error": "Missing dashboardId in request."})
    return await run_in_threadpool(_client(request).get_dashboard, dashboard_id)


async def health() -> dict[str, str]:
    return {"status": "healthy"}


async def zanalytics_error_handler(request: Request, exc: ZAnalyticsError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=400, content={"error": exc.message})
    status = exc.status_code if exc.status_code and exc.status_code >= 400 else 500
    logger.warning("Upstream call for %s failed: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status,
        content={
            "error": exc.message,
            "code": getattr(exc, "code", None),
            "details": exc.details,
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    settings: RelaySettings | None = None,
    client: AnalyticsClient | None = None,
) -> FastAPI:
    """Build the relay application.

    Args:
        settings: Relay settings; read from the environment when omitted.
        client: Pre-built client. When omitted one is created from ``ZOHO_*``
            environment variables and closed on shutdown.

    Raises:
        ConfigError: If credentials are missing. No application is created.
    """

    settings = settings or RelaySettings()
    owns_client = client is None
    if client is None:
        client = AnalyticsClient.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting relay on %s:%s (origins=%s, limit=%s)",
            settings.host,
            settings.port,
            settings.get_allowed_origins(),
            settings.rate_limit,
        )
        yield
        if owns_client:
            client.close()
        logger.info("Relay stopped")

    app = FastAPI(
        title="Zoho Analytics relay",
        version=CLIENT_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.client = client
    app.state.settings = settings
    app.state.limiter = build_limiter(settings.rate_limit)

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(ZAnalyticsError, zanalytics_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    app.add_middleware(LoggingMiddleware)

    for prefix in ("", LEGACY_PREFIX):
        app.add_api_route(f"{prefix}/report", fetch_report, methods=["POST"])
        app.add_api_route(f"{prefix}/dashboard", fetch_dashboard, methods=["GET"])
        app.add_api_route(f"{prefix}/health", health, methods=["GET"])
    return app


def main() -> None:
    """Console entry point: validate configuration, then serve with uvicorn."""

    import uvicorn

    settings = RelaySettings()
    configure_logging(logging.DEBUG if settings.debug else logging.INFO)
    try:
        app = create_app(settings)
    except ConfigError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
