import asyncio

from anonchat.core.rate_limit import RateLimiter


def run(coro):
    return asyncio.run(coro)


def test_first_requests_up_to_limit_are_allowed():
    limiter = RateLimiter(request_limit=5, window_seconds=60)

    results = [run(limiter.allow("alice", float(t))) for t in range(5)]

    assert results == [True] * 5
    assert run(limiter.allow("alice", 5.0)) is False


def test_denied_request_does_not_touch_window():
    limiter = RateLimiter(request_limit=2, window_seconds=60)
    run(limiter.allow("alice", 0.0))
    run(limiter.allow("alice", 1.0))

    assert run(limiter.allow("alice", 2.0)) is False
    window = limiter._windows["alice"]
    assert window.count == 2
    assert window.last_request_time == 0.0


def test_window_resets_after_expiry():
    limiter = RateLimiter(request_limit=5, window_seconds=60)
    for t in range(5):
        run(limiter.allow("alice", float(t)))
    assert run(limiter.allow("alice", 30.0)) is False

    assert run(limiter.allow("alice", 60.5)) is True
    window = limiter._windows["alice"]
    assert window.count == 1
    assert window.last_request_time == 60.5


def test_window_boundary_is_exclusive():
    limiter = RateLimiter(request_limit=1, window_seconds=60)
    run(limiter.allow("alice", 0.0))

    # Exactly one window later is still inside it.
    assert run(limiter.allow("alice", 60.0)) is False
    assert run(limiter.allow("alice", 60.001)) is True


def test_senders_are_counted_independently():
    limiter = RateLimiter(request_limit=1, window_seconds=60)

    assert run(limiter.allow("alice", 0.0)) is True
    assert run(limiter.allow("bob", 0.0)) is True
    assert run(limiter.allow("alice", 1.0)) is False
    assert len(limiter) == 2


def test_unknown_sender_has_no_window():
    limiter = RateLimiter()
    assert "nobody" not in limiter._windows
    assert len(limiter) == 0
