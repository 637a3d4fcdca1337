# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade wiring the HTTP client, rate limiter and engine for a run."""

from __future__ import annotations

import threading
from contextlib import suppress

from .config import HttpSettings, load_http_settings, load_run_settings
from .engine import ComparisonEngine
from .executor import RequestExecutor
from .http.client import HttpClient, create_default_http_client
from .models import HeaderConfig, RunResult, TargetSet
from .ratelimit import RateLimitConfig, RateLimiter


class ApiJsonCompare:
    """
    Convenience wrapper that owns one HTTP client and one rate limiter.

    The limiter lives as long as the facade, so consecutive ``run`` calls share
    its pacing and it is never reset mid-run.
    """

    def __init__(
        self,
        base_domain: str,
        new_domain: str,
        *,
        rate_limit: float | None = None,
        headers: HeaderConfig | None = None,
        http_client: HttpClient | None = None,
        http_settings: HttpSettings | None = None,
    ):
        self.http_settings = http_settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        requests_per_second = rate_limit if rate_limit is not None else load_run_settings().rate_limit
        self.limiter = RateLimiter(RateLimitConfig(requests_per_second=requests_per_second))
        self.executor = RequestExecutor(self.http_client, headers)
        self.engine = ComparisonEngine(
            base_domain,
            new_domain,
            executor=self.executor,
            limiter=self.limiter,
        )

    def run(self, target_set: TargetSet, *, cancel_event: threading.Event | None = None) -> RunResult:
        return self.engine.run(target_set, cancel_event=cancel_event)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> ApiJsonCompare:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
