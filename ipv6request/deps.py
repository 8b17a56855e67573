"""Dependency helpers for request-scoped collaborators."""

from __future__ import annotations

from fastapi import Request

from ipv6request.services.lookups import LookupService


def get_client_ip(request: Request) -> str:
    """Best guess at the caller's public address.

    Behind a proxy the first ``X-Forwarded-For`` entry wins, then
    ``X-Real-IP``, then the socket peer.
    """

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_lookup_service(request: Request) -> LookupService:
    """Return the process-wide lookup service created in the lifespan."""

    return request.app.state.lookup_service
