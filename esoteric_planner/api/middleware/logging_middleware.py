"""
Request Logging Middleware

Logs one line per request and binds a request id to the structlog context
so every log call made while handling the request carries it.

    → X-Request-ID header (taken from the client or generated)
    → "Request completed" method=GET path=/api/strategies status=200 duration_ms=12.4
"""

import time
import uuid

from fastapi import FastAPI, Request

from esoteric_planner.shared.core.logging import clear_log_context, log_context, logger

REQUEST_ID_HEADER = "X-Request-ID"


def setup_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        clear_log_context()
        log_context(request_id=request_id)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                exc_info=True,
            )
            raise

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        clear_log_context()
        return response
