"""Shared helpers for audit logging: derive request provenance from a Starlette Request."""

from __future__ import annotations

from dataclasses import dataclass

from starlette.requests import Request

UNKNOWN = "unknown"


@dataclass(frozen=True)
class RequestProvenance:
    """Who sent the request, as recorded in activity log entries."""

    ip_address: str
    user_agent: str
    request_id: str | None = None


def get_request_provenance(request: Request) -> RequestProvenance:
    """Return provenance for audit entries.

    request_id from request state (RequestIDMiddleware), IP from
    X-Forwarded-For (first hop) or request.client.host, user agent from
    header. Missing IP or user agent are recorded as "unknown".
    """
    request_id = getattr(request.state, "request_id", None)
    client_host = request.client.host if request.client else None
    forwarded = request.headers.get("X-Forwarded-For")
    ip_address = (
        (forwarded.split(",")[0].strip() if forwarded else None) or client_host
    )
    user_agent = request.headers.get("User-Agent")
    return RequestProvenance(
        ip_address=ip_address or UNKNOWN,
        user_agent=user_agent or UNKNOWN,
        request_id=request_id,
    )
