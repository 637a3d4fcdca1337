# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Error taxonomy and exception helpers.

Errors fall into three groups which the engine dispatches on by class:

- ``ConfigurationError`` and ``RunCancelledError`` abort the whole run.
- ``RequestError`` is recorded as a finding and abandons the remaining
  expanded paths of the current target only.
- JSON content mismatches are never raised; they are recorded as findings
  with the ``JSON_MISMATCH`` error string.
"""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .models.result import RunResult

JSON_MISMATCH = "JSON mismatch"


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps the underlying OS error, so walk the cause chain.
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(current, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR
        current = current.__cause__ or current.__context__

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


class ApijcError(Exception):
    """Base class for every apijc error."""

    # Findings collected before a run-fatal error; set by the engine.
    result: RunResult | None = None


class ConfigurationError(ApijcError):
    """Invalid input. Fatal to the whole run, never retried."""


class NoTargetsDefinedError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("no URL targets defined")


class DomainsIdenticalError(ConfigurationError):
    def __init__(self, domain: str) -> None:
        self.domain = domain
        super().__init__("base and new domain cannot be the same domain")


class PrefixWithoutSuffixError(ConfigurationError):
    def __init__(self, relative_path: str) -> None:
        self.relative_path = relative_path
        super().__init__(f"{relative_path}: patternPrefix is filled but patternSuffix is not")


class SuffixWithoutPrefixError(ConfigurationError):
    def __init__(self, relative_path: str) -> None:
        self.relative_path = relative_path
        super().__init__(f"{relative_path}: patternSuffix is filled but patternPrefix is not")


class ConflictingBodySourceError(ConfigurationError):
    def __init__(self, relative_path: str) -> None:
        self.relative_path = relative_path
        super().__init__(
            f"{relative_path}: must have only one of requestBody or requestBodyFile - both are given"
        )


class BodyFileNotFoundError(ConfigurationError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"{path}: could not find requestBodyFile")


class TargetFileError(ConfigurationError):
    """A target or header definition file could not be read or has the wrong shape."""


class PatternError(ConfigurationError):
    """A templated path could not be expanded."""


class InvalidOptionsError(PatternError):
    def __init__(self, prefix: str, suffix: str) -> None:
        self.prefix = prefix
        self.suffix = suffix
        super().__init__(f"pattern prefix and suffix cannot be empty (prefix={prefix!r}, suffix={suffix!r})")


class InvalidRangeFormatError(PatternError):
    def __init__(self, token: str, count: int) -> None:
        self.token = token
        self.count = count
        super().__init__(f'"{token}": number of elements != 2, is {count}: invalid number range')


class InvalidRangeBoundError(PatternError):
    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f'"{token}": {reason}: not a valid number range')


class RunCancelledError(ApijcError):
    """The cancellation signal fired while the run was in progress."""

    def __init__(self, message: str = "run cancelled") -> None:
        super().__init__(message)


class RequestError(ApijcError):
    """A single request failed. Recorded as a finding; the run continues."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(message)


class TransportError(RequestError):
    """No response arrived (DNS, TCP, TLS, timeout); reported with status code 0."""

    status_code = 0

    def __init__(
        self,
        url: str,
        expected: int,
        cause: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ) -> None:
        self.expected = expected
        self.cause = cause
        self.category = category
        super().__init__(
            url,
            f"unexpected status code: expected {expected}, got 0; client: error making http request: {cause}",
        )


class StatusMismatchError(RequestError):
    def __init__(self, url: str, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(url, f"unexpected status code: expected {expected}, got {actual}")


__all__ = [
    "ApijcError",
    "BodyFileNotFoundError",
    "ConfigurationError",
    "ConflictingBodySourceError",
    "DomainsIdenticalError",
    "ErrorCategory",
    "InvalidOptionsError",
    "InvalidRangeBoundError",
    "InvalidRangeFormatError",
    "JSON_MISMATCH",
    "NoTargetsDefinedError",
    "PatternError",
    "PrefixWithoutSuffixError",
    "RequestError",
    "RunCancelledError",
    "StatusMismatchError",
    "SuffixWithoutPrefixError",
    "TargetFileError",
    "TransportError",
    "categorize_exception",
]
