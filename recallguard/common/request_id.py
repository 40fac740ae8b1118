"""Request ID middleware and log correlation."""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from recallguard.core.logging import get_logger, request_id_var

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assign a request id, expose it in X-Request-ID, and log request timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        logger.debug("Request started", extra={"method": request.method, "path": request.url.path})
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "latency_ms": int((time.perf_counter() - start) * 1000),
                    "error": str(e),
                },
                exc_info=True,
            )
            raise
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "latency_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return response
