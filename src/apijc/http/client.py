# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport seam between the request executor and the network."""

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Sends one prepared request and reports what came back.

    Implementations never raise for network problems: a request that got no
    response at all (DNS, TCP, TLS, timeout) is returned as ``ok=False`` with
    ``error_message`` set and, where known, ``meta["error_category"]``. Any
    response that arrived is ``ok=True`` whatever its status code.

    When ``request.expected_status`` is set and the response carries another
    status, the body is left unread and ``content`` is empty.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Build the httpx-backed client used by the CLI and the facade."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())


__all__ = ["HttpClient", "create_default_http_client"]
