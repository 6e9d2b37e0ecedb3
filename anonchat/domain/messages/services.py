"""Admission pipeline that decides whether a posted message reaches the board."""
from __future__ import annotations

import asyncio
import enum
import hashlib
import logging
import time
from typing import Callable, Optional

from anonchat.core.config import Settings
from anonchat.core.dedup import ContentDeduplicator, encoded_length
from anonchat.core.rate_limit import RateLimiter
from anonchat.domain.messages.models import Message, MessageLog

logger = logging.getLogger("anonchat.moderation")


class AdmissionResult(str, enum.Enum):
    """Outcome of :meth:`ChatCoordinator.submit`."""

    ACCEPTED = "accepted"
    RATE_LIMITED = "rate_limited"
    REJECTED = "rejected"

    @property
    def detail(self) -> str:
        return _DETAILS[self]


_DETAILS = {
    AdmissionResult.ACCEPTED: "Message posted.",
    AdmissionResult.RATE_LIMITED: "Too many requests. Please wait and try again.",
    AdmissionResult.REJECTED: "Message is either too long or has already been sent.",
}


def anonymise(sender_id: str) -> str:
    """Short stable digest of a sender identity, safe to log."""
    return hashlib.sha256(sender_id.encode()).hexdigest()[:12]


class ChatCoordinator:
    """Own the board state and run every submission through moderation.

    Stages run in order: rate check, content check, processing delay, commit.
    Each resource is locked only for its own stage, and the delay holds no
    lock at all, so submissions from different senders overlap.

    Content that passed the content check is already recorded as seen when
    the delay starts. If the task dies before committing, that content stays
    consumed without ever reaching the log.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        deduplicator: ContentDeduplicator,
        log: MessageLog,
        processing_delay: float = 3.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.rate_limiter = rate_limiter
        self.deduplicator = deduplicator
        self.log = log
        self.processing_delay = processing_delay
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Callable[[], float] = time.time) -> "ChatCoordinator":
        return cls(
            rate_limiter=RateLimiter(
                request_limit=settings.REQUEST_LIMIT,
                window_seconds=settings.WINDOW_SECONDS,
            ),
            deduplicator=ContentDeduplicator(
                max_message_length=settings.MAX_MESSAGE_LENGTH,
                recent_limit=settings.RECENT_MESSAGE_LIMIT,
            ),
            log=MessageLog(),
            processing_delay=settings.PROCESSING_DELAY_SECONDS,
            clock=clock,
        )

    async def submit(self, sender_id: str, content: str, now: Optional[float] = None) -> AdmissionResult:
        """Run the admission pipeline for one post."""
        if now is None:
            # Windows are tracked in whole seconds.
            now = int(self._clock())

        if not await self.rate_limiter.allow(sender_id, now):
            logger.warning("Rate limit exceeded for sender %s", anonymise(sender_id))
            return AdmissionResult.RATE_LIMITED

        if not await self.deduplicator.admit(content):
            logger.info(
                "Rejected message from sender %s (%d bytes)",
                anonymise(sender_id),
                encoded_length(content),
            )
            return AdmissionResult.REJECTED

        if self.processing_delay > 0:
            await asyncio.sleep(self.processing_delay)

        await self.log.append(Message(sender=sender_id, content=content))
        logger.info("Accepted message from sender %s", anonymise(sender_id))
        return AdmissionResult.ACCEPTED

    async def messages(self) -> tuple[Message, ...]:
        """Snapshot of the board, oldest first."""
        return await self.log.snapshot()

    def state_summary(self) -> dict[str, str | int]:
        """Sizes of the shared state, and whether any of it is poisoned."""
        poisoned = any(
            resource.poisoned for resource in (self.rate_limiter, self.deduplicator, self.log)
        )
        return {
            "state": "poisoned" if poisoned else "ok",
            "messages": len(self.log),
            "senders": len(self.rate_limiter),
            "recent_contents": len(self.deduplicator),
        }


__all__ = ["AdmissionResult", "ChatCoordinator", "anonymise"]
