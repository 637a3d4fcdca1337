# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse

Responder = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests; records every request in order."""

    def __init__(self, responses: dict[str, HttpResponse | Responder] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | Responder) -> None:
        self._responses[url] = response

    def add_json(self, url: str, body: str, status_code: int = 200) -> None:
        self.add(url, HttpResponse(ok=True, status_code=status_code, content=body.encode("utf-8"), url=url))

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        configured = self._responses.get(request.url)
        if configured is None:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")
        if callable(configured):
            return configured(request)
        return configured

    @property
    def requested_urls(self) -> list[str]:
        return [request.url for request in self.requests]

    def close(self) -> None:
        self.closed = True
