import logging
import time
from typing import Callable, Dict, Tuple

from starlette.middleware.base import BaseHTTPMiddleware

from stockroom.core.responses import error_response

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window request limiter keyed by client IP.

    Only paths under ``path_prefix`` are counted. Counters live in process
    memory, so each worker process enforces its own limit.
    """

    def __init__(self, app, max_requests: int, window_seconds: int, path_prefix: str = "/api/",
                 clock: Callable[[], float] = time.monotonic):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_sweep = clock()

    def _hit(self, client_ip: str) -> int:
        """Register a request and return how many the client has made in the current window."""
        now = self.clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)

        window_start, count = self._windows.get(client_ip, (now, 0))
        if now - window_start >= self.window_seconds:
            window_start, count = now, 0
        count += 1
        self._windows[client_ip] = (window_start, count)
        return count

    def _sweep(self, now: float):
        # Drop clients whose window has expired
        self._windows = {
            ip: (window_start, count)
            for ip, (window_start, count) in self._windows.items()
            if now - window_start < self.window_seconds
        }
        self._last_sweep = now

    async def dispatch(self, request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        count = self._hit(client_ip)
        remaining = max(self.max_requests - count, 0)

        if count > self.max_requests:
            logger.warning(f"Rate limit exceeded for {client_ip}")
            response = error_response("Too many requests from this IP, please try again later.", 429)
        else:
            response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
