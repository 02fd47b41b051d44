"""
Request Logging Middleware

Raw ASGI middleware writing one access-log line per HTTP request with
method, path, status and duration.
"""

import logging
import time

logger = logging.getLogger("wellness.access")

SLOW_REQUEST_MS = 2000


class RequestLoggingMiddleware:
    """Log every HTTP request once it has been answered"""

    def __init__(self, app, skip_paths=("/docs", "/redoc", "/openapi.json", "/favicon.ico")):
        self.app = app
        self.skip_paths = tuple(skip_paths)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or scope.get("path", "").startswith(self.skip_paths):
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            logger.error(f"Request processing error: {scope.get('method')} {scope.get('path')}: {e}")
            raise
        finally:
            self._log(scope, status_code, (time.perf_counter() - start_time) * 1000)

    def _log(self, scope, status_code: int, duration_ms: float) -> None:
        method = scope.get("method", "-")
        path = scope.get("path", "")
        line = f"{method} {path} {status_code} {duration_ms:.1f}ms"
        if duration_ms > SLOW_REQUEST_MS:
            logger.warning(f"Slow request: {line}")
        elif status_code >= 500:
            logger.error(line)
        elif status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)
