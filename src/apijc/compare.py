# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Structural JSON comparison.

The diff itself is computed by DeepDiff. The rendering lists one hunk per
differing node: the JSON path to the node, then the old value and the new
value, e.g.::

    @ ["foo","bar"]
    - 123
    + "baz"

An empty string means the two documents are structurally identical.
"""

from __future__ import annotations

import json
from typing import Any

from deepdiff import DeepDiff

_ADDED_SUFFIX = "_added"
_REMOVED_SUFFIX = "_removed"


def parse_body(body: bytes) -> Any:
    """Decode a response body as JSON; text that is not JSON is compared as an opaque string."""
    text = body.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


def _render_value(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _render_path(path: list[Any]) -> str:
    return json.dumps(path, separators=(",", ":"), ensure_ascii=False)


def render_diff(diff: DeepDiff) -> str:
    """Render a tree-view DeepDiff as path-keyed hunks."""
    hunks: list[tuple[str, str]] = []
    for report_type, levels in diff.items():
        for level in levels:
            path = _render_path(level.path(output_format="list"))
            lines = [f"@ {path}"]
            if not report_type.endswith(_ADDED_SUFFIX):
                lines.append(f"- {_render_value(level.t1)}")
            if not report_type.endswith(_REMOVED_SUFFIX):
                lines.append(f"+ {_render_value(level.t2)}")
            hunks.append((path, "".join(line + "\n" for line in lines)))
    hunks.sort(key=lambda hunk: hunk[0])
    return "".join(text for _, text in hunks)


def compare_documents(base: Any, new: Any) -> str:
    """Compare two decoded JSON documents; array order and length are significant, int vs float is not."""
    return render_diff(DeepDiff(base, new, ignore_order=False, ignore_numeric_type_changes=True, view="tree"))


def compare_bodies(base_body: bytes, new_body: bytes) -> str:
    """Compare two raw JSON bodies and return the rendered diff ("" when equal)."""
    return compare_documents(parse_body(base_body), parse_body(new_body))


__all__ = ["compare_bodies", "compare_documents", "parse_body", "render_diff"]
