from __future__ import annotations

from commune.services import rate_limiter
from commune.services.rate_limiter import SlidingWindowRateLimiter


def test_thirty_requests_in_window_are_admitted_and_thirty_first_rejected() -> None:
    limiter = SlidingWindowRateLimiter(window_ms=60_000, max_requests=30)

    results = [limiter.admit("caller", now=float(i * 1000)) for i in range(30)]
    assert all(results)

    assert limiter.admit("caller", now=30_000.0) is False


def test_requests_are_admitted_again_after_window_elapses() -> None:
    limiter = SlidingWindowRateLimiter(window_ms=60_000, max_requests=30)
    for _ in range(31):
        limiter.admit("caller", now=0.0)

    assert limiter.admit("caller", now=60_000.0) is True
    assert limiter.bucket_size("caller") == 1


def test_rejected_attempts_still_count() -> None:
    limiter = SlidingWindowRateLimiter(window_ms=1_000, max_requests=2)

    assert limiter.admit("caller", now=0.0)
    assert limiter.admit("caller", now=100.0)
    assert not limiter.admit("caller", now=200.0)
    assert limiter.bucket_size("caller") == 3

    # The first two fall out of the window, the rejected one at 200 remains.
    assert limiter.admit("caller", now=1_150.0)
    assert not limiter.admit("caller", now=1_160.0)


def test_entries_exactly_one_window_old_are_pruned() -> None:
    limiter = SlidingWindowRateLimiter(window_ms=1_000, max_requests=1)

    assert limiter.admit("caller", now=0.0)
    assert not limiter.admit("caller", now=999.0)
    assert limiter.admit("caller", now=1_999.0)


def test_callers_are_tracked_independently() -> None:
    limiter = SlidingWindowRateLimiter(window_ms=60_000, max_requests=1)

    assert limiter.admit("alice", now=0.0)
    assert limiter.admit("bob", now=0.0)
    assert not limiter.admit("alice", now=1.0)


def test_default_clock_is_used_when_now_is_omitted() -> None:
    limiter = SlidingWindowRateLimiter(max_requests=1)

    assert limiter.admit("caller")
    assert not limiter.admit("caller")


def test_reset_forgets_all_buckets() -> None:
    limiter = SlidingWindowRateLimiter(max_requests=1)
    limiter.admit("caller", now=0.0)

    limiter.reset()

    assert limiter.bucket_size("caller") == 0
    assert limiter.admit("caller", now=1.0)


def test_default_clock_is_monotonic(monkeypatch) -> None:
    clock = {"now": 100.0}
    monkeypatch.setattr(rate_limiter.time, "monotonic", lambda: clock["now"])
    limiter = rate_limiter.SlidingWindowRateLimiter(window_ms=60_000, max_requests=1)

    assert limiter.admit("caller")
    clock["now"] = 100.5
    assert not limiter.admit("caller")
    clock["now"] = 161.0
    assert limiter.admit("caller")
