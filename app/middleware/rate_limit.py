"""
app/middleware/rate_limit.py — Sliding-window per-IP rate limiter.
Only applies to GET /share/*, where share ids could otherwise be guessed at
speed. Limit configurable via .env SHARE_RATE_LIMIT_PER_MINUTE.
X-Forwarded-For is only honoured when the direct peer is in TRUSTED_PROXIES.
"""
import time
from collections import defaultdict, deque
from typing import Callable
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from app.config import get_settings

_log: dict[str, deque] = defaultdict(deque)
_last_sweep = 0.0
WINDOW = 60
LIMITED_PREFIX = "/share/"


def _ip(request: Request, trusted_proxies) -> str:
    peer = request.client.host if request.client else "unknown"
    if peer in trusted_proxies:
        fwd = request.headers.get("X-Forwarded-For")
        if fwd:
            return fwd.split(",")[0].strip()
    return peer


def _sweep(now: float) -> None:
    """Drop clients with no hit inside the window."""
    stale = [ip for ip, q in _log.items() if not q or now - q[-1] > WINDOW]
    for ip in stale:
        del _log[ip]


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        global _last_sweep
        if request.method == "GET" and request.url.path.startswith(LIMITED_PREFIX):
            settings = get_settings()
            limit = settings.share_rate_limit_per_minute
            ip = _ip(request, settings.trusted_proxies)
            now = time.monotonic()
            if now - _last_sweep > WINDOW:
                _sweep(now)
                _last_sweep = now
            q = _log[ip]
            while q and now - q[0] > WINDOW:
                q.popleft()
            if len(q) >= limit:
                retry = int(WINDOW - (now - q[0])) + 1
                return JSONResponse(
                    status_code=429,
                    content={"detail": f"Rate limit exceeded. Max {limit}/min per IP.", "retry_after_seconds": retry},
                    headers={"Retry-After": str(retry)},
                )
            q.append(now)
        return await call_next(request)
