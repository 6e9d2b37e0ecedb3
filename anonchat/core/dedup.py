"""
Recent-content deduplication for posted messages.

The store is a *forgetful* set: once it holds ``recent_limit`` entries the
next admission wipes it completely before recording the new content. It is
not an LRU. A content string may therefore be posted again right after a
wipe.
"""
from __future__ import annotations

from anonchat.core.guards import ResourceGuard


def encoded_length(content: str) -> int:
    """Size of ``content`` in UTF-8 bytes. Lone surrogates count as three bytes."""
    return len(content.encode("utf-8", "surrogatepass"))


class ContentDeduplicator:
    """Reject over-long content and content seen since the last wipe.

    Args:
        max_message_length: Longest accepted content, in UTF-8 bytes.
        recent_limit: Number of distinct contents remembered before the
                      store is cleared.
    """

    def __init__(self, max_message_length: int = 200, recent_limit: int = 100) -> None:
        self.max_message_length = max_message_length
        self.recent_limit = recent_limit
        self._recent: set[str] = set()
        self._guard = ResourceGuard("content_deduplicator")

    @property
    def poisoned(self) -> bool:
        return self._guard.poisoned

    async def admit(self, content: str) -> bool:
        """Record ``content`` and return True, or return False without recording it."""
        if encoded_length(content) > self.max_message_length:
            return False

        async with self._guard:
            if content in self._recent:
                return False

            if len(self._recent) >= self.recent_limit:
                self._recent.clear()
            self._recent.add(content)
            return True

    def __len__(self) -> int:
        return len(self._recent)


__all__ = ["ContentDeduplicator", "encoded_length"]
