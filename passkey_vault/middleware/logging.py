import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from passkey_vault.lib.logger import configure_logger

logger = configure_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per HTTP request with status and latency."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response: Response = await call_next(request)

        process_time = time.perf_counter() - start_time

        request_info = {
            "method": request.method,
            "path": request.url.path,
            "client": request.client.host if request.client else "unknown",
        }
        response_info = {
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
        }

        status_emoji = "✓" if response.status_code < 400 else "✗"
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{status_emoji} {request.method} {request.url.path}",
            extra={
                "request": request_info,
                "response": response_info,
                "event_type": "http_request",
            },
        )

        return response
