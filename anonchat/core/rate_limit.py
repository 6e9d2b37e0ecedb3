"""Simple in-memory rate limiting utilities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from anonchat.core.guards import ResourceGuard


@dataclass(slots=True)
class SenderWindow:
    """Request counter for one sender inside the current window."""

    last_request_time: float
    count: int


class RateLimiter:
    """Count requests per sender inside a window that restarts once it expires.

    Windows are created on first use and kept for the lifetime of the
    process. There is no pruning of idle senders.
    """

    def __init__(self, request_limit: int = 5, window_seconds: float = 60) -> None:
        self.request_limit = request_limit
        self.window_seconds = window_seconds
        self._windows: Dict[str, SenderWindow] = {}
        self._guard = ResourceGuard("rate_limiter")

    @property
    def poisoned(self) -> bool:
        return self._guard.poisoned

    async def allow(self, sender_id: str, now: float) -> bool:
        """Return True when the sender may submit at ``now``."""
        async with self._guard:
            window = self._windows.get(sender_id)
            if window is None:
                self._windows[sender_id] = SenderWindow(last_request_time=now, count=1)
                return True

            if now - window.last_request_time > self.window_seconds:
                window.last_request_time = now
                window.count = 1
                return True

            if window.count < self.request_limit:
                window.count += 1
                return True

            return False

    def __len__(self) -> int:
        return len(self._windows)


__all__ = ["RateLimiter", "SenderWindow"]
