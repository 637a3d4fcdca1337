# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Findings and per-run results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Finding:
    """One observed discrepancy. ``diff`` is empty unless the bodies differed."""

    url: str
    error: str
    diff: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "error": self.error, "diff": self.diff}


@dataclass
class RunResult:
    """Append-only findings of one run plus the path counters."""

    findings: list[Finding] = field(default_factory=list)
    total_paths: int = 0
    checked_paths: int = 0

    def add_finding(self, url: str, error: str, diff: str = "") -> Finding:
        finding = Finding(url=url, error=error, diff=diff)
        self.findings.append(finding)
        return finding

    @property
    def ok(self) -> bool:
        return not self.findings

    def to_dict(self) -> dict[str, Any]:
        return {
            "findings": [finding.to_dict() for finding in self.findings],
            "total_paths": self.total_paths,
            "checked_paths": self.checked_paths,
        }
