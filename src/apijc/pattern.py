# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Path-template expansion.

A template such as ``/foo/{1-3,7}/bar`` is turned into the concrete paths
``/foo/1/bar``, ``/foo/2/bar``, ``/foo/3/bar`` and ``/foo/7/bar``. A bracket
holds a comma-separated list of literal tokens and inclusive integer ranges
(``lo-hi``, either bound may be negative). Several brackets in one path form a
cartesian product ordered by the first bracket.

Known asymmetry kept for compatibility with existing target files: only
literal tokens resolve the brackets that follow. A range substitutes its
integers into the first bracket and leaves any later bracket untouched, so
``/{1-2}/{a,b}`` yields ``/1/{a,b}`` and ``/2/{a,b}``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from .errors import InvalidOptionsError, InvalidRangeBoundError, InvalidRangeFormatError

DEFAULT_PATTERN_PREFIX = "{"
DEFAULT_PATTERN_SUFFIX = "}"

# Same shape as govalidator's IsInt: optional sign, no leading zeros.
_INT_RE = re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$")


@dataclass(frozen=True)
class PatternOptions:
    prefix: str = DEFAULT_PATTERN_PREFIX
    suffix: str = DEFAULT_PATTERN_SUFFIX


@lru_cache(maxsize=64)
def _compile(prefix: str, suffix: str) -> re.Pattern[str]:
    return re.compile(re.escape(prefix) + r"([a-zA-Z0-9,\-.]+)" + re.escape(suffix))


def parse_range(token: str) -> tuple[int, int]:
    """Parse ``lo-hi`` into inclusive integer bounds, allowing negative numbers."""
    pieces = token.split("-")
    # A leading "-" on either bound produces an empty piece; glue it back on.
    if len(pieces) > 2 and pieces[0] == "":
        pieces = ["-" + pieces[1], *pieces[2:]]
    if len(pieces) > 2 and pieces[1] == "":
        pieces = [pieces[0], "-" + pieces[2]]

    if len(pieces) != 2:
        raise InvalidRangeFormatError(token, len(pieces))
    if not _INT_RE.match(pieces[0]):
        raise InvalidRangeBoundError(token, "first number")
    if not _INT_RE.match(pieces[1]):
        raise InvalidRangeBoundError(token, "second number")

    lower, upper = int(pieces[0]), int(pieces[1])
    if upper < lower:
        raise InvalidRangeBoundError(token, "first number cannot be bigger than second number")
    return lower, upper


def expand_path(path: str, options: PatternOptions | None = None) -> list[str]:
    """
    Expand every bracket expression in ``path`` into the ordered list of concrete paths.

    A path without brackets is returned unchanged as a single-element list.
    Raises ``InvalidOptionsError`` for an empty prefix or suffix and
    ``InvalidRangeFormatError``/``InvalidRangeBoundError`` for malformed ranges.
    """
    opts = options or PatternOptions()
    if not opts.prefix or not opts.suffix:
        raise InvalidOptionsError(opts.prefix, opts.suffix)
    pattern = _compile(opts.prefix, opts.suffix)

    results: list[str] = []
    # Stack of (text, needs_expansion); children are pushed in reverse so
    # popping yields depth-first order, which is the required output order.
    pending: list[tuple[str, bool]] = [(path, True)]
    while pending:
        text, needs_expansion = pending.pop()
        if not needs_expansion:
            results.append(text)
            continue

        matches = list(pattern.finditer(text))
        if not matches:
            results.append(text)
            continue

        head = matches[0]
        whole, interior = head.group(0), head.group(1)
        more_brackets = len(matches) > 1
        children: list[tuple[str, bool]] = []
        for part in interior.split(","):
            if "-" not in part:
                children.append((text.replace(whole, part, 1), more_brackets))
                continue
            # Ranges never resolve the remaining brackets (see module docstring).
            lower, upper = parse_range(part)
            children.extend((text.replace(whole, str(i), 1), False) for i in range(lower, upper + 1))
        pending.extend(reversed(children))

    return results


__all__ = [
    "DEFAULT_PATTERN_PREFIX",
    "DEFAULT_PATTERN_SUFFIX",
    "PatternOptions",
    "expand_path",
    "parse_range",
]
