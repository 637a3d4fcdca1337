# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for apijc runs."""

from __future__ import annotations

import logging
import os

# httpx and httpcore log every request at INFO/DEBUG; a run already logs one
# line per target, so they stay quiet unless apijc itself runs at DEBUG.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str | None = None) -> int:
    name = (level or os.getenv("APIJC_LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str | None = None) -> int:
    """Configure root logging for a run and return the level applied."""
    effective = resolve_level(level)
    logging.basicConfig(level=effective, format="%(levelname)s %(name)s: %(message)s")
    transport_level = logging.DEBUG if effective <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return effective


__all__ = ["TRANSPORT_LOGGERS", "resolve_level", "setup_logging"]
