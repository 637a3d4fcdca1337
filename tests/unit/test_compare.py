# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from apijc.compare import compare_bodies, compare_documents, parse_body


def test_identical_documents_have_no_diff():
    assert compare_bodies(b'{"foo": "bar"}', b'{"foo":"bar"}') == ""
    assert compare_bodies(b"{}", b"{}") == ""
    assert compare_bodies(b'{"foo": {"bar": 123}}', b'{"foo": {"bar": 123}}') == ""


def test_key_order_is_not_significant():
    assert compare_bodies(b'{"a": 1, "b": 2}', b'{"b": 2, "a": 1}') == ""


def test_integer_and_float_spellings_of_a_number_are_equal():
    assert compare_bodies(b'{"n": 1}', b'{"n": 1.0}') == ""
    assert compare_documents({"items": [2, 3.0]}, {"items": [2.0, 3]}) == ""
    assert compare_bodies(b'{"n": 1}', b'{"n": 1.5}') == '@ ["n"]\n- 1\n+ 1.5\n'


def test_changed_value_renders_path_and_both_values():
    assert compare_bodies(b'{"foo": 123}', b'{"foo": 456}') == '@ ["foo"]\n- 123\n+ 456\n'


def test_nested_type_change():
    assert compare_bodies(b'{"foo": {"bar": 123}}', b'{"foo": {"bar": "baz"}}') == '@ ["foo","bar"]\n- 123\n+ "baz"\n'


def test_added_and_removed_keys():
    assert compare_documents({"a": 1}, {"a": 1, "b": 2}) == '@ ["b"]\n+ 2\n'
    assert compare_documents({"a": 1, "b": 2}, {"a": 1}) == '@ ["b"]\n- 2\n'


def test_array_order_is_significant():
    diff = compare_documents({"items": [1, 2]}, {"items": [2, 1]})
    assert diff != ""
    assert '@ ["items",' in diff


def test_array_length_is_significant():
    diff = compare_documents([1, 2], [1, 2, 3])
    assert diff == "@ [2]\n+ 3\n"


def test_hunks_are_ordered_by_path():
    diff = compare_documents({"b": 1, "a": 1}, {"b": 2, "a": 2})
    assert diff == '@ ["a"]\n- 1\n+ 2\n@ ["b"]\n- 1\n+ 2\n'


def test_unparsable_bodies_are_compared_as_text():
    assert parse_body(b"<html>oops</html>") == "<html>oops</html>"
    assert compare_bodies(b"not json", b"not json") == ""
    assert compare_bodies(b"", b"") == ""
    diff = compare_bodies(b"not json", b'{"ok": true}')
    assert diff.startswith("@ []\n")
    assert '- "not json"' in diff
