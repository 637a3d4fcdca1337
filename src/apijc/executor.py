# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Build and send one request for a target and validate its status code."""

from __future__ import annotations

import logging
import os
import threading

from .errors import (
    BodyFileNotFoundError,
    ConflictingBodySourceError,
    ErrorCategory,
    RunCancelledError,
    StatusMismatchError,
    TransportError,
)
from .http import HttpClient, HttpRequest, merge_headers
from .models import HeaderConfig, Side, Target

logger = logging.getLogger(__name__)


def resolve_request_body(target: Target) -> bytes | None:
    """Return the literal body or the body file's content, never both."""
    if target.request_body is not None and target.request_body_file is not None:
        raise ConflictingBodySourceError(target.relative_path)

    if target.request_body is not None:
        return target.request_body.encode("utf-8")

    if target.request_body_file is not None:
        if not os.path.isfile(target.request_body_file):
            raise BodyFileNotFoundError(target.request_body_file)
        with open(target.request_body_file, "rb") as handle:
            return handle.read()

    return None


class RequestExecutor:
    """Issues the request for one side of a comparison and returns the raw body."""

    def __init__(self, http_client: HttpClient, headers: HeaderConfig | None = None):
        self.http_client = http_client
        self.headers = headers or HeaderConfig()

    def build_request(self, target: Target, url: str, side: Side) -> HttpRequest:
        body = resolve_request_body(target)
        headers = merge_headers(
            self.headers.global_headers,
            self.headers.for_side(side),
            target.request_headers,
        )
        return HttpRequest(
            url=url,
            method=target.http_method,
            headers=headers,
            body=body,
            expected_status=target.expected_status_code,
        )

    def execute(
        self,
        target: Target,
        url: str,
        side: Side,
        *,
        cancel_event: threading.Event | None = None,
    ) -> bytes:
        """
        Send the request and return the response body.

        Raises ``TransportError`` when no response arrived and
        ``StatusMismatchError`` when the status differs from the expected one.
        Body-source problems raise configuration errors before anything is sent.
        """
        request = self.build_request(target, url, side)
        if cancel_event is not None and cancel_event.is_set():
            raise RunCancelledError(f"run cancelled before requesting {url}")

        logger.debug("%s %s (%s)", request.method, url, side.value)
        response = self.http_client.request(request)

        if not response.ok or response.status_code is None:
            category = response.meta.get("error_category", ErrorCategory.UNKNOWN_ERROR)
            raise TransportError(
                url,
                target.expected_status_code,
                response.error_message or "no response received",
                category=category,
            )

        if response.status_code != target.expected_status_code:
            raise StatusMismatchError(url, target.expected_status_code, response.status_code)

        if response.meta.get("body_truncated"):
            logger.warning(
                "Response body of %s truncated at %s bytes; comparison may report spurious differences",
                url,
                response.meta.get("body_bytes_limit"),
            )
        return response.content


__all__ = ["RequestExecutor", "resolve_request_body"]
