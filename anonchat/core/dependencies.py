"""Request dependencies for shared application state."""
from __future__ import annotations

from fastapi import Request

from anonchat.domain.messages.services import ChatCoordinator


def get_coordinator(request: Request) -> ChatCoordinator:
    """Return the coordinator built for this process at startup."""
    return request.app.state.coordinator


__all__ = ["get_coordinator"]
