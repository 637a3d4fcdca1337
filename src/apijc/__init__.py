# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
apijc package entrypoint.

apijc checks two deployments of the same HTTP API ("base" and "new") for
contract drift: templated paths are expanded into concrete requests, each is
sent to both domains under a shared rate limit, and structural differences
between the JSON responses are collected as findings. HTTP behavior is
abstracted behind an injectable client interface, and domain objects are
modeled with typed dataclasses.
"""

from .compare import compare_bodies
from .config import HttpSettings, RunSettings, load_http_settings, load_run_settings
from .engine import ComparisonEngine
from .errors import (
    ApijcError,
    ConfigurationError,
    RequestError,
    RunCancelledError,
)
from .executor import RequestExecutor
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .loader import load_header_config, load_target_set
from .log import setup_logging
from .models import Finding, HeaderConfig, RunResult, Side, Target, TargetSet
from .pattern import PatternOptions, expand_path
from .ratelimit import RateLimitConfig, RateLimiter
from .runtime import ApiJsonCompare
from .version import __version__

__all__ = [
    "ApiJsonCompare",
    "ApijcError",
    "ComparisonEngine",
    "ConfigurationError",
    "Finding",
    "HeaderConfig",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "PatternOptions",
    "RateLimitConfig",
    "RateLimiter",
    "RequestError",
    "RequestExecutor",
    "RunCancelledError",
    "RunResult",
    "RunSettings",
    "Side",
    "StubHttpClient",
    "Target",
    "TargetSet",
    "compare_bodies",
    "create_default_http_client",
    "expand_path",
    "load_header_config",
    "load_http_settings",
    "load_run_settings",
    "load_target_set",
    "setup_logging",
    "__version__",
]
