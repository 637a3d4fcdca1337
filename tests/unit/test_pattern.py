# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from apijc.errors import InvalidOptionsError, InvalidRangeBoundError, InvalidRangeFormatError, PatternError
from apijc.pattern import PatternOptions, expand_path, parse_range


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/foo/bar", ["/foo/bar"]),
        ("", [""]),
        ("/foo/{}/bar", ["/foo/{}/bar"]),
        ("{1,2}", ["1", "2"]),
        ("/foo/{1,2}/bar", ["/foo/1/bar", "/foo/2/bar"]),
        ("/foo/{1,2}/{a,b}", ["/foo/1/a", "/foo/1/b", "/foo/2/a", "/foo/2/b"]),
        ("/foo/{1-2,3-5}/bar", ["/foo/1/bar", "/foo/2/bar", "/foo/3/bar", "/foo/4/bar", "/foo/5/bar"]),
        ("/foo/{0,1-2}/bar", ["/foo/0/bar", "/foo/1/bar", "/foo/2/bar"]),
        ("/foo/{1-2,0}/bar", ["/foo/1/bar", "/foo/2/bar", "/foo/0/bar"]),
        (
            "/foo/{0,1-3,5,7-9}/bar",
            ["/foo/0/bar", "/foo/1/bar", "/foo/2/bar", "/foo/3/bar", "/foo/5/bar", "/foo/7/bar", "/foo/8/bar", "/foo/9/bar"],
        ),
        ("/foo/{-2-0}/bar", ["/foo/-2/bar", "/foo/-1/bar", "/foo/0/bar"]),
        ("/foo/{-2--1}/bar", ["/foo/-2/bar", "/foo/-1/bar"]),
        ("/users/{a.b,c}", ["/users/a.b", "/users/c"]),
    ],
)
def test_expand_path_default_brackets(path, expected):
    assert expand_path(path) == expected


def test_expand_path_range_of_twenty_is_ascending():
    paths = expand_path("/foo/{1-20}/bar")
    assert paths == [f"/foo/{i}/bar" for i in range(1, 21)]


def test_expand_path_three_brackets_cartesian_order():
    paths = expand_path("/{a,b}/{c,d}/{e,f}")
    assert paths == ["/a/c/e", "/a/c/f", "/a/d/e", "/a/d/f", "/b/c/e", "/b/c/f", "/b/d/e", "/b/d/f"]


def test_expand_path_literal_bracket_resolves_later_range():
    assert expand_path("/{a,b}/{1-2}") == ["/a/1", "/a/2", "/b/1", "/b/2"]


def test_expand_path_range_leaves_later_brackets_unexpanded():
    # Ranges substitute into the first bracket only; remaining brackets stay as written.
    assert expand_path("/{1-2}/{a,b}") == ["/1/{a,b}", "/2/{a,b}"]
    assert expand_path("/{x,1-2}/{a,b}") == ["/x/a", "/x/b", "/1/{a,b}", "/2/{a,b}"]


@pytest.mark.parametrize(
    ("path", "prefix", "suffix", "expected"),
    [
        ("%1,2%", "%", "%", ["1", "2"]),
        ("/v1/@1-3@", "@", "@", ["/v1/1", "/v1/2", "/v1/3"]),
        ("/v1/[[a,b]]/{1,2}", "[[", "]]", ["/v1/a/{1,2}", "/v1/b/{1,2}"]),
        ("/v1/$(1-2)", "$(", ")", ["/v1/1", "/v1/2"]),
    ],
)
def test_expand_path_custom_prefix_and_suffix(path, prefix, suffix, expected):
    assert expand_path(path, PatternOptions(prefix=prefix, suffix=suffix)) == expected


@pytest.mark.parametrize(("prefix", "suffix"), [("", "}"), ("{", ""), ("", "")])
def test_expand_path_rejects_empty_options(prefix, suffix):
    with pytest.raises(InvalidOptionsError):
        expand_path("/no/brackets/here", PatternOptions(prefix=prefix, suffix=suffix))


@pytest.mark.parametrize(
    ("path", "error", "message"),
    [
        ("/foo/{a-2}/bar", InvalidRangeBoundError, '"a-2": first number: not a valid number range'),
        ("/foo/{1-b}/bar", InvalidRangeBoundError, '"1-b": second number: not a valid number range'),
        (
            "/foo/{2-1}/bar",
            InvalidRangeBoundError,
            '"2-1": first number cannot be bigger than second number: not a valid number range',
        ),
        ("/foo/{1-2-5}/bar", InvalidRangeFormatError, '"1-2-5": number of elements != 2, is 3: invalid number range'),
    ],
)
def test_expand_path_range_errors(path, error, message):
    with pytest.raises(error) as excinfo:
        expand_path(path)
    assert str(excinfo.value) == message
    assert isinstance(excinfo.value, PatternError)


def test_expand_path_error_in_nested_bracket_propagates():
    with pytest.raises(InvalidRangeBoundError):
        expand_path("/{a,b}/{5-1}")


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("1-3", (1, 3)),
        ("0-0", (0, 0)),
        ("-2-0", (-2, 0)),
        ("-2--1", (-2, -1)),
        ("-5-+3", (-5, 3)),
    ],
)
def test_parse_range_bounds(token, expected):
    assert parse_range(token) == expected


@pytest.mark.parametrize("token", ["01-3", "1-", "-", "1.5-2", "1--2"])
def test_parse_range_rejects_bad_bounds(token):
    with pytest.raises(InvalidRangeBoundError):
        parse_range(token)
