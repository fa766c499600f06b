# File: app/core/middleware.py

"""
HTTP guards applied to every request: security headers, body-size limit and
a per-client fixed-window rate limit on the API prefix.
"""

import logging
import threading
import time

from fastapi import FastAPI, HTTPException, Request, status
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.config import Settings
from app.core.errors import error_response
from app.core.headers import apply_security_headers

logger = logging.getLogger(__name__)

BODY_TOO_LARGE = "Request body too large"


class RateLimiter:
    """Fixed-window request counter keyed by client address."""

    def __init__(self, max_requests: int, window_seconds: int, clock=time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._next_sweep = clock() + window_seconds
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float) -> None:
        expired = [
            key for key, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        self._next_sweep = now + self.window_seconds

    def hit(self, key: str) -> tuple[bool, int]:
        """
        Count one request for ``key``.

        Returns (allowed, seconds until the window resets).
        """
        now = self.clock()
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            count += 1
            self._windows[key] = (started, count)
            retry_after = max(0, int(self.window_seconds - (now - started)))
            return count <= self.max_requests, retry_after

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


def client_key(request: Request, trust_proxy_headers: bool = False) -> str:
    if trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than ``max_body_bytes``.

    A declared Content-Length is checked up front. Bodies without one
    (chunked uploads) are counted as they are received, and the read that
    crosses the limit fails with 413.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                length = int(content_length)
            except ValueError:
                response = error_response(status.HTTP_400_BAD_REQUEST, "Invalid Content-Length header")
                await response(scope, receive, send)
                return
            if length > self.max_body_bytes:
                response = error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, BODY_TOO_LARGE)
                await response(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise HTTPException(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, BODY_TOO_LARGE)
            return message

        await self.app(scope, limited_receive, send)


def register_middleware(app: FastAPI, settings: Settings) -> None:
    limiter = RateLimiter(settings.rate_limit_max_requests, settings.rate_limit_window_seconds)
    app.state.rate_limiter = limiter
    api_prefix = settings.api_prefix

    # Innermost, so an oversized body surfaces as a 413 from the route that reads it
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

    @app.middleware("http")
    async def rate_limit_middleware(request: Request, call_next):
        if request.url.path.startswith(api_prefix):
            key = client_key(request, settings.trust_proxy_headers)
            allowed, retry_after = limiter.hit(key)
            if not allowed:
                logger.warning("Rate limit exceeded for %s", key)
                response = error_response(
                    status.HTTP_429_TOO_MANY_REQUESTS,
                    "Too many requests from this IP, please try again later.",
                )
                response.headers["Retry-After"] = str(retry_after)
                return response
        return await call_next(request)

    # Registered last so it wraps the other guards; headers land on every response.
    @app.middleware("http")
    async def security_headers_middleware(request: Request, call_next):
        response = await call_next(request)
        return apply_security_headers(response)
