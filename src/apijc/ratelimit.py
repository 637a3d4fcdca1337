# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Token-bucket rate limiter shared by every comparison in a run.

One token pays for one compared path, i.e. the base request and the new
request together.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from .config import DEFAULT_RATE_LIMIT
from .errors import RunCancelledError

Clock = Callable[[], float]
# Waits up to ``seconds``; returns True when the cancel event fired.
Waiter = Callable[[float, "threading.Event | None"], bool]


def _default_wait(seconds: float, cancel_event: threading.Event | None) -> bool:
    if cancel_event is None:
        time.sleep(seconds)
        return False
    return cancel_event.wait(seconds)


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    requests_per_second: float = DEFAULT_RATE_LIMIT
    burst_limit: int = 1

    def __post_init__(self) -> None:
        if self.requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be positive, got {self.requests_per_second}")
        if self.burst_limit < 1:
            raise ValueError(f"burst_limit must be at least 1, got {self.burst_limit}")


@dataclass
class RateLimiterStats:
    """Statistics for rate limiter."""

    tokens_acquired: int = 0
    acquisitions_delayed: int = 0
    total_wait_time: float = 0.0


class RateLimiter:
    """Blocking token bucket; starts full so the first acquire never waits."""

    def __init__(
        self,
        config: RateLimitConfig | float | None = None,
        *,
        clock: Clock = time.monotonic,
        wait: Waiter = _default_wait,
    ) -> None:
        if config is None:
            self.config = RateLimitConfig()
        elif isinstance(config, (int, float)):
            self.config = RateLimitConfig(requests_per_second=float(config))
        else:
            self.config = config

        self._clock = clock
        self._wait = wait
        self._tokens = float(self.config.burst_limit)
        self._last_update = self._clock()
        self._lock = threading.Lock()
        self.stats = RateLimiterStats()

    def acquire(self, cancel_event: threading.Event | None = None) -> float:
        """Block until one token is available and take it.

        Returns the number of seconds spent waiting. Raises ``RunCancelledError``
        if ``cancel_event`` is set before or while waiting.
        """
        waited = 0.0
        with self._lock:
            while True:
                if cancel_event is not None and cancel_event.is_set():
                    raise RunCancelledError("run cancelled while waiting for the rate limiter")

                self._refill_tokens()
                if self._tokens >= 1:
                    self._tokens -= 1
                    self.stats.tokens_acquired += 1
                    if waited:
                        self.stats.acquisitions_delayed += 1
                        self.stats.total_wait_time += waited
                    return waited

                wait_time = (1 - self._tokens) / self.config.requests_per_second
                if self._wait(wait_time, cancel_event):
                    raise RunCancelledError("run cancelled while waiting for the rate limiter")
                waited += wait_time

    def _refill_tokens(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._last_update)
        self._last_update = now
        self._tokens = min(self._tokens + elapsed * self.config.requests_per_second, float(self.config.burst_limit))

    def get_stats(self) -> dict:
        """Get current statistics as a dictionary."""
        return {
            "tokens_acquired": self.stats.tokens_acquired,
            "acquisitions_delayed": self.stats.acquisitions_delayed,
            "total_wait_time_seconds": round(self.stats.total_wait_time, 3),
        }


__all__ = ["RateLimitConfig", "RateLimiter", "RateLimiterStats"]
