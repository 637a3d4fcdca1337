# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclasses describing what to probe and which headers to send."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import TargetFileError


class Side(str, Enum):
    """Which deployment a request is sent to."""

    BASE = "base"
    NEW = "new"


def _optional_str(data: Mapping[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TargetFileError(f"{where}: {key} must be a string")
    return value


def _str_mapping(value: Any, where: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TargetFileError(f"{where}: expected an object of string values")
    out: dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(item, str):
            raise TargetFileError(f"{where}: value for {key!r} must be a string")
        out[str(key)] = item
    return out


@dataclass(frozen=True)
class Target:
    """One declared probe: a path template plus what the response must look like."""

    relative_path: str
    expected_status_code: int
    http_method: str = "GET"
    request_body: str | None = None
    request_body_file: str | None = None
    request_headers: dict[str, str] = field(default_factory=dict)
    pattern_prefix: str | None = None
    pattern_suffix: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, where: str = "target") -> Target:
        if not isinstance(data, Mapping):
            raise TargetFileError(f"{where}: expected an object")

        relative_path = data.get("relativePath")
        if not isinstance(relative_path, str):
            raise TargetFileError(f"{where}: relativePath is required and must be a string")
        where = f"{where} ({relative_path})"

        status = data.get("expectedStatusCode")
        if isinstance(status, bool) or not isinstance(status, int):
            raise TargetFileError(f"{where}: expectedStatusCode is required and must be an integer")

        method = data.get("httpMethod") or "GET"
        if not isinstance(method, str):
            raise TargetFileError(f"{where}: httpMethod must be a string")

        return cls(
            relative_path=relative_path,
            expected_status_code=status,
            http_method=method.upper(),
            request_body=_optional_str(data, "requestBody", where),
            request_body_file=_optional_str(data, "requestBodyFile", where),
            request_headers=_str_mapping(data.get("requestHeaders"), f"{where}: requestHeaders"),
            pattern_prefix=_optional_str(data, "patternPrefix", where),
            pattern_suffix=_optional_str(data, "patternSuffix", where),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "relativePath": self.relative_path,
            "httpMethod": self.http_method,
            "expectedStatusCode": self.expected_status_code,
        }
        optional = {
            "requestBody": self.request_body,
            "requestBodyFile": self.request_body_file,
            "patternPrefix": self.pattern_prefix,
            "patternSuffix": self.pattern_suffix,
        }
        out.update({key: value for key, value in optional.items() if value is not None})
        if self.request_headers:
            out["requestHeaders"] = dict(self.request_headers)
        return out


@dataclass(frozen=True)
class TargetSet:
    """
    Independent targets plus named sequential groups.

    Groups run after the independent targets; entries inside a group run in
    listed order because later entries may depend on earlier side effects.
    """

    targets: tuple[Target, ...] = ()
    sequential_targets: dict[str, tuple[Target, ...]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.targets and not self.sequential_targets

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TargetSet:
        if not isinstance(data, Mapping):
            raise TargetFileError("target file must contain a JSON object")

        raw_targets = data.get("targets") or []
        if not isinstance(raw_targets, list):
            raise TargetFileError("targets must be a list")
        targets = tuple(Target.from_mapping(item, where=f"targets[{idx}]") for idx, item in enumerate(raw_targets))

        raw_groups = data.get("sequentialTargets") or {}
        if not isinstance(raw_groups, Mapping):
            raise TargetFileError("sequentialTargets must be an object of lists")
        groups: dict[str, tuple[Target, ...]] = {}
        for name, items in raw_groups.items():
            if not isinstance(items, list):
                raise TargetFileError(f"sequentialTargets[{name!r}] must be a list")
            groups[str(name)] = tuple(
                Target.from_mapping(item, where=f"sequentialTargets[{name!r}][{idx}]") for idx, item in enumerate(items)
            )
        return cls(targets=targets, sequential_targets=groups)


@dataclass(frozen=True)
class HeaderConfig:
    """Header layers; later layers win: global, then per-domain, then per-target."""

    global_headers: dict[str, str] = field(default_factory=dict)
    base_domain: dict[str, str] = field(default_factory=dict)
    new_domain: dict[str, str] = field(default_factory=dict)

    def for_side(self, side: Side) -> dict[str, str]:
        return self.base_domain if side is Side.BASE else self.new_domain

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> HeaderConfig:
        """Accept either a flat name/value object (global headers) or the layered form."""
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise TargetFileError("header file must contain a JSON object")
        if any(isinstance(value, Mapping) for value in data.values()):
            unknown = set(data) - {"global", "baseDomain", "newDomain"}
            if unknown:
                raise TargetFileError(f"unknown header sections: {', '.join(sorted(unknown))}")
            return cls(
                global_headers=_str_mapping(data.get("global"), "headers.global"),
                base_domain=_str_mapping(data.get("baseDomain"), "headers.baseDomain"),
                new_domain=_str_mapping(data.get("newDomain"), "headers.newDomain"),
            )
        return cls(global_headers=_str_mapping(data, "headers"))
