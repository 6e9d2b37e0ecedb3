"""Per-resource asyncio guards that refuse access after a failed critical section."""
from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Optional, Type

from anonchat.core.errors import StatePoisonedError

logger = logging.getLogger(__name__)


class ResourceGuard:
    """Exclusive-access guard for one piece of shared state.

    Wraps an :class:`asyncio.Lock`. If the guarded block raises, the guard is
    marked poisoned and every later ``async with`` raises
    :class:`StatePoisonedError` instead of handing out possibly half-mutated
    state.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = asyncio.Lock()
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    async def __aenter__(self) -> "ResourceGuard":
        await self._lock.acquire()
        if self._poisoned:
            self._lock.release()
            raise StatePoisonedError(self.name)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is not None:
                self._poisoned = True
                logger.error("Guard %s poisoned by %s", self.name, exc_type.__name__)
        finally:
            self._lock.release()


__all__ = ["ResourceGuard"]
