# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for apijc."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"apijc/{__version__} (+api JSON contract comparison)"
DEFAULT_RATE_LIMIT = 1.0
DEFAULT_MAX_BODY_BYTES = 16 * 1024 * 1024


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("APIJC_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=_float_env("APIJC_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("APIJC_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("APIJC_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("APIJC_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


@dataclass
class RunSettings:
    """Run-level defaults: request pacing and the overall time budget."""

    rate_limit: float = DEFAULT_RATE_LIMIT
    max_duration: float | None = None

    @classmethod
    def from_env(cls) -> "RunSettings":
        rate_limit = _float_env("APIJC_RATE_LIMIT", cls.rate_limit)
        if rate_limit <= 0:
            rate_limit = cls.rate_limit
        return cls(
            rate_limit=rate_limit,
            max_duration=_optional_float_env("APIJC_MAX_DURATION", cls.max_duration),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_run_settings() -> RunSettings:
    """Load run settings from environment with sensible defaults."""
    return RunSettings.from_env()
