"""
HTTP middleware.

``log_requests`` writes one log line per request with the method, path,
status code and elapsed time, and carries a correlation id through the
``X-Correlation-ID`` header.  Register it with
``app.middleware("http")(log_requests)``.
"""

import logging
import time
import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response

CORRELATION_ID_HEADER = "X-Correlation-ID"

logger = logging.getLogger("api_template.requests")


def _level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    correlation_id = request.headers.get(CORRELATION_ID_HEADER) or uuid.uuid4().hex
    request.state.correlation_id = correlation_id
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.exception(
            "HTTP %s %s failed in %.1f ms [correlation_id=%s]",
            request.method,
            request.url.path,
            elapsed_ms,
            correlation_id,
        )
        raise

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.log(
        _level_for_status(response.status_code),
        "HTTP %s %s responded %s in %.1f ms [correlation_id=%s]",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        correlation_id,
    )
    response.headers[CORRELATION_ID_HEADER] = correlation_id
    return response
