# File: app/core/headers.py

"""
Response headers shared by the guard middleware and the 500 handler.

Starlette renders unhandled errors from its outermost layer, outside every
user middleware, so the 500 handler applies these itself.
"""

from typing import Iterable

from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-Permitted-Cross-Domain-Policies": "none",
}


def apply_security_headers(response: Response) -> Response:
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


def apply_cors_headers(response: Response, request: Request, allowed_origins: Iterable[str]) -> Response:
    """Mirror what CORSMiddleware adds to a simple request from an allowed origin."""
    origin = request.headers.get("origin")
    if origin and origin in allowed_origins:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers.add_vary_header("Origin")
    return response
