import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from assetproxy.shared.logging import get_logger

__all__ = ["CallLoggingMiddleware"]


class CallLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every RPC call with its outcome and duration.

    Failed calls (4xx and 5xx) are logged at warning level so they stand out
    from routine traffic.
    """

    def __init__(self, app):
        super().__init__(app)
        self.logger = get_logger(__name__)

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        level = "warning" if response.status_code >= 400 else "info"
        getattr(self.logger, level)(
            f"{request.method} {request.url.path} | {response.status_code} | {elapsed_ms:.1f}ms"
        )
        return response
