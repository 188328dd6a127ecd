"""CORS and access-log middleware."""

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from rbac_server.core.config import settings

logger = logging.getLogger("rbac_server")

REQUEST_ID_HEADER = "X-Request-Id"
RESPONSE_TIME_HEADER = "X-Response-Time-Ms"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Stamp a request id and log each request with the claimed acting user.

    An incoming ``X-Request-Id`` is reused so ids can be traced across a proxy.
    Denied requests (401/403) are logged at WARNING.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        response: Response = await call_next(request)

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = str(elapsed_ms)

        level = logging.WARNING if response.status_code in (401, 403) else logging.INFO
        logger.log(
            level,
            "[%s] %s %s user=%s -> %s (%sms)",
            request_id[:8],
            request.method,
            request.url.path,
            request.headers.get("x-user-id", "-"),
            response.status_code,
            elapsed_ms,
        )
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install CORS for the browser client and the access log."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "x-user-id", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER, RESPONSE_TIME_HEADER],
    )
    app.add_middleware(AccessLogMiddleware)
