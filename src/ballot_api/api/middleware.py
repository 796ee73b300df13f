"""CORS and security headers middleware, plus client IP resolution for vote audit."""

import ipaddress
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from ballot_api.core.config import Settings

_DEFAULT_TRUSTED_HEADERS = ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"]


def _parse_ip(value: str) -> str | None:
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Resolve the address recorded against a cast ballot.

    Trusted proxy headers are consulted in order and the first one holding a
    parseable IP address wins; X-Forwarded-For contributes its leftmost hop.
    Header values that are not IP addresses are skipped, so a forged or
    garbled header never ends up in the vote audit trail.

    Args:
        request: The incoming Starlette request.
        trusted_headers: Ordered header names. Defaults to
            ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"].

    Returns:
        The client IP address, or "unknown" if not determinable.
    """
    headers = trusted_headers if trusted_headers is not None else _DEFAULT_TRUSTED_HEADERS

    for header in headers:
        raw = request.headers.get(header, "")
        if header.lower() == "x-forwarded-for":
            raw = raw.split(",", 1)[0]
        address = _parse_ip(raw) if raw.strip() else None
        if address is not None:
            return address

    if request.client:
        return request.client.host
    return "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware on the FastAPI app."""
    kwargs: dict[str, Any] = {
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
    }
    if settings.cors_origin_list:
        kwargs["allow_origins"] = settings.cors_origin_list
    if settings.cors_origin_regex.strip():
        kwargs["allow_origin_regex"] = settings.cors_origin_regex.strip()
    app.add_middleware(CORSMiddleware, **kwargs)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses. Ballot responses are never cached."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "no-referrer"
        if "/ballots/" in request.url.path:
            response.headers["Cache-Control"] = "no-store"
        return response
