"""HTTP request/response logging with timing.

Every request that is not on an excluded path produces a "Request started"
record (method, path, client, timestamp) and a "Request completed" record
(status code, duration). Requests slower than the configured threshold also
produce a warning.
"""

import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from lambda_posts.api.constants import MAX_USER_AGENT_LENGTH, REQUEST_ID_HEADER
from lambda_posts.core.config import LogConfig
from lambda_posts.core.context import generate_request_id


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses.

    Args:
        app: The ASGI application.
        log_config: Logging configuration.
    """

    def __init__(self, app: ASGIApp, *, log_config: LogConfig) -> None:
        super().__init__(app)
        self.log_config = log_config
        self.excluded_paths = set(log_config.excluded_paths)

    @staticmethod
    def _get_client_ip(request: Request) -> str:
        """Return the direct client address, or "unknown"."""
        if request.client:
            return request.client.host
        return "unknown"

    @staticmethod
    def _get_user_agent(request: Request) -> str:
        """Return the user agent, truncated to a sane length."""
        ua = request.headers.get("user-agent", "")
        return ua[:MAX_USER_AGENT_LENGTH] if ua else "unknown"

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Process the request and log details.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: The response from the application.

        Raises:
            Exception: Any exception raised by the application is re-raised
                after logging.
        """
        if request.url.path in self.excluded_paths:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()

        with logger.contextualize(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            logger.info(
                "Request started",
                client_host=self._get_client_ip(request),
                user_agent=self._get_user_agent(request),
                time=datetime.now(UTC).isoformat(),
            )

            start_time = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as exc:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    "Request failed",
                    duration_ms=round(duration_ms, 2),
                    error_type=type(exc).__name__,
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id

            if duration_ms > self.log_config.slow_request_threshold_ms:
                logger.warning(
                    "Slow request detected",
                    duration_ms=round(duration_ms, 2),
                    threshold_ms=self.log_config.slow_request_threshold_ms,
                )

            return response
