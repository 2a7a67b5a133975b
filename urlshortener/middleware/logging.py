"""
Request logging middleware for FastAPI using Loguru.

Every request gets an ``X-Request-ID`` header and one log record at the
custom ``REQUEST`` level with method, path, status code and latency.
"""

import time
import uuid
from contextvars import ContextVar
from typing import Any, Dict

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable to store request ID across async context
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one record per HTTP request and tag the response with its request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        # Reuse an upstream request ID when a proxy already assigned one
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request_id_var.set(request_id)

        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers[REQUEST_ID_HEADER] = request_id

        # Get client IP with forwarded headers consideration
        client_ip = request.client.host if request.client else "unknown"
        if "X-Forwarded-For" in request.headers:
            forwarded_ips = request.headers["X-Forwarded-For"].split(",")
            if forwarded_ips:
                client_ip = forwarded_ips[0].strip()

        log_record: Dict[str, Any] = {
            "request_id": request_id,
            "client_ip": client_ip,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
        }

        logger.log(
            "REQUEST",
            "{method} {path} {status_code} {process_time_ms}ms",
            **log_record,
        )
        return response
