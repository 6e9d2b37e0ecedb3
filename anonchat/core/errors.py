"""Errors raised by the chat state layer."""
from __future__ import annotations


class ChatStateError(RuntimeError):
    """Base error for failures of the shared chat state."""


class StatePoisonedError(ChatStateError):
    """Raised when a guarded resource was left inconsistent by an earlier failure."""

    def __init__(self, resource: str) -> None:
        super().__init__(f"Shared state '{resource}' is poisoned by a previous failure")
        self.resource = resource


__all__ = ["ChatStateError", "StatePoisonedError"]
