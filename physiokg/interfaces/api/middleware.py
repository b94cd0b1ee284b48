"""
API Middleware - Request tracing and the error contract.

Every response carries ``X-Request-ID`` and ``X-Response-Time-Ms``. Engine
errors answer with the status their kind declares (400 invalid argument,
404 unknown condition, 503 graph unavailable, 504 reasoning timeout) and a
body of ``{"error": {code, message, details}, "request_id": ...}``.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from physiokg.config.errors import ErrorCode, PhysioKGError

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _error_response(request: Request, status_code: int, error: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "request_id": _request_id(request)},
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id, time it, and log one line per response.

    Exceptions that escape the route handlers and the PhysioKGError handler
    become an INTERNAL_ERROR 500 here so the request still gets its headers.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error on %s %s request_id=%s",
                request.method,
                request.url.path,
                request_id,
            )
            response = _error_response(
                request,
                500,
                {
                    "code": ErrorCode.INTERNAL_ERROR.value,
                    "message": "Internal server error",
                    "details": {},
                },
            )

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
        logger.info(
            "%s %s status=%d latency_ms=%.2f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
        )
        return response


async def handle_physiokg_error(request: Request, exc: PhysioKGError) -> JSONResponse:
    """Answer an engine error with the status its kind declares."""
    # Graph outages and timeouts are operational problems, caller mistakes are not
    log = logger.error if exc.http_status >= 500 else logger.info
    log(
        "%s: %s request_id=%s details=%s",
        exc.code.value,
        exc.message,
        _request_id(request),
        exc.details,
    )
    return _error_response(request, exc.http_status, exc.to_dict())


def install_middleware(app: FastAPI) -> None:
    """Register request tracing and the PhysioKGError handler on ``app``."""
    app.add_exception_handler(PhysioKGError, handle_physiokg_error)
    app.add_middleware(RequestContextMiddleware)
