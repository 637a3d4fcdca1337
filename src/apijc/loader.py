# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Read target-set and header definition files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import TargetFileError
from .models import HeaderConfig, TargetSet


def _read_json(path: str | Path, kind: str) -> Any:
    try:
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        raise TargetFileError(f"cannot read {kind} {path}: {exc}") from exc
    except ValueError as exc:
        raise TargetFileError(f"cannot unmarshal {kind} {path}: {exc}") from exc


def load_target_set(path: str | Path) -> TargetSet:
    """Load ``{"targets": [...], "sequentialTargets": {...}}`` from a JSON file."""
    return TargetSet.from_mapping(_read_json(path, "target file"))


def load_header_config(path: str | Path | None) -> HeaderConfig:
    """Load header overrides; a missing path means no extra headers."""
    if path is None or str(path) == "":
        return HeaderConfig()
    return HeaderConfig.from_mapping(_read_json(path, "header file"))


__all__ = ["load_header_config", "load_target_set"]
