"""In-memory message model and the shared append-only log."""
from __future__ import annotations

from dataclasses import dataclass

from anonchat.core.guards import ResourceGuard


@dataclass(frozen=True, slots=True)
class Message:
    """A posted chat message. Fields hold raw, unescaped user input."""

    sender: str
    content: str


class MessageLog:
    """Ordered, append-only message store.

    Messages are kept in commit order for the lifetime of the process.
    Readers only ever receive an immutable snapshot.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._guard = ResourceGuard("message_log")

    @property
    def poisoned(self) -> bool:
        return self._guard.poisoned

    async def append(self, message: Message) -> None:
        async with self._guard:
            self._messages.append(message)

    async def snapshot(self) -> tuple[Message, ...]:
        """Return every stored message, oldest first."""
        async with self._guard:
            return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)


__all__ = ["Message", "MessageLog"]
