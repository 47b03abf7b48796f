"""FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from docchat.services import Services


def get_services(request: Request) -> Services:
    """Return the services built for this app at startup."""
    return request.app.state.services  # type: ignore[no-any-return]
