# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for apijc."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .result import Finding, RunResult
from .target import HeaderConfig, Side, Target, TargetSet

__all__ = [
    "Finding",
    "HeaderConfig",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "RunResult",
    "Side",
    "Target",
    "TargetSet",
]
