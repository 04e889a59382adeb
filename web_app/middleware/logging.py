"""Request logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request: status, duration and redirect target.

    Server errors are logged at ERROR, everything else at INFO.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortlink.web")

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        client = request.client.host if request.client else "-"

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        line = (
            f"{client} {request.method} {request.url.path} "
            f"{response.status_code} {elapsed_ms:.1f}ms"
        )
        location = response.headers.get("location")
        if location:
            line += f" -> {location}"

        level = logging.ERROR if response.status_code >= 500 else logging.INFO
        self.logger.log(level, line)

        return response
