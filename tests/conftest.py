import pytest
from fastapi.testclient import TestClient

from anonchat.core.dedup import ContentDeduplicator
from anonchat.core.dependencies import get_coordinator
from anonchat.core.rate_limit import RateLimiter
from anonchat.domain.messages.models import MessageLog
from anonchat.domain.messages.services import ChatCoordinator
from main import app


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_coordinator(clock=None, processing_delay: float = 0.0, **limits) -> ChatCoordinator:
    return ChatCoordinator(
        rate_limiter=RateLimiter(
            request_limit=limits.get("request_limit", 5),
            window_seconds=limits.get("window_seconds", 60),
        ),
        deduplicator=ContentDeduplicator(
            max_message_length=limits.get("max_message_length", 200),
            recent_limit=limits.get("recent_limit", 100),
        ),
        log=MessageLog(),
        processing_delay=processing_delay,
        clock=clock or FakeClock(),
    )


async def poison(guard) -> None:
    try:
        async with guard:
            raise RuntimeError("failure mid-mutation")
    except RuntimeError:
        pass


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def coordinator(clock):
    return build_coordinator(clock)


@pytest.fixture()
def client(coordinator):
    app.dependency_overrides[get_coordinator] = lambda: coordinator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
