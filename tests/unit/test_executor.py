# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading

import pytest

from apijc.errors import (
    BodyFileNotFoundError,
    ConflictingBodySourceError,
    ErrorCategory,
    RequestError,
    RunCancelledError,
    StatusMismatchError,
    TransportError,
)
from apijc.executor import RequestExecutor, resolve_request_body
from apijc.http import HttpResponse, StubHttpClient
from apijc.models import HeaderConfig, Side, Target


def test_execute_returns_body_on_expected_status():
    stub = StubHttpClient()
    stub.add_json("http://base/foo", '{"foo": 1}')
    executor = RequestExecutor(stub)
    body = executor.execute(Target("/foo", 200), "http://base/foo", Side.BASE)
    assert body == b'{"foo": 1}'
    assert stub.requests[0].method == "GET"
    assert stub.requests[0].expected_status == 200
    assert stub.requests[0].body is None


def test_headers_merge_global_then_domain_then_target():
    stub = StubHttpClient()
    stub.add_json("http://base/foo", "{}")
    stub.add_json("http://new/foo", "{}")
    headers = HeaderConfig(
        global_headers={"Authorization": "global", "X-Env": "global", "X-Trace": "1"},
        base_domain={"x-env": "base"},
        new_domain={"X-Env": "new"},
    )
    target = Target("/foo", 200, request_headers={"authorization": "target"})
    executor = RequestExecutor(stub, headers)

    executor.execute(target, "http://base/foo", Side.BASE)
    executor.execute(target, "http://new/foo", Side.NEW)

    assert stub.requests[0].headers == {"authorization": "target", "x-env": "base", "X-Trace": "1"}
    assert stub.requests[1].headers == {"authorization": "target", "X-Env": "new", "X-Trace": "1"}


def test_literal_request_body_is_sent():
    stub = StubHttpClient()
    stub.add_json("http://base/items", "{}", status_code=201)
    target = Target("/items", 201, http_method="POST", request_body='{"a":"b"}')
    RequestExecutor(stub).execute(target, "http://base/items", Side.BASE)
    assert stub.requests[0].method == "POST"
    assert stub.requests[0].body == b'{"a":"b"}'


def test_request_body_file_is_read(tmp_path):
    body_file = tmp_path / "body.json"
    body_file.write_text('{"from": "file"}', encoding="utf-8")
    target = Target("/items", 201, http_method="POST", request_body_file=str(body_file))
    assert resolve_request_body(target) == b'{"from": "file"}'


def test_both_body_sources_are_rejected_before_sending(tmp_path):
    body_file = tmp_path / "body.json"
    body_file.write_text("{}", encoding="utf-8")
    stub = StubHttpClient()
    target = Target("/items", 201, request_body="{}", request_body_file=str(body_file))
    with pytest.raises(ConflictingBodySourceError):
        RequestExecutor(stub).execute(target, "http://base/items", Side.BASE)
    assert stub.requests == []


def test_missing_body_file_is_rejected(tmp_path):
    stub = StubHttpClient()
    missing = str(tmp_path / "missing.json")
    target = Target("/items", 201, request_body_file=missing)
    with pytest.raises(BodyFileNotFoundError) as excinfo:
        RequestExecutor(stub).execute(target, "http://base/items", Side.BASE)
    assert str(excinfo.value) == f"{missing}: could not find requestBodyFile"
    assert stub.requests == []


def test_status_mismatch_is_a_request_error():
    stub = StubHttpClient()
    stub.add_json("http://base/foo", "{}", status_code=500)
    with pytest.raises(StatusMismatchError) as excinfo:
        RequestExecutor(stub).execute(Target("/foo", 200), "http://base/foo", Side.BASE)
    err = excinfo.value
    assert isinstance(err, RequestError)
    assert (err.expected, err.actual, err.url) == (200, 500, "http://base/foo")
    assert str(err) == "unexpected status code: expected 200, got 500"


def test_transport_failure_reports_status_zero():
    stub = StubHttpClient()
    stub.add(
        "http://base/foo",
        HttpResponse(ok=False, error_message="dns lookup failed", meta={"error_category": ErrorCategory.DNS_ERROR}),
    )
    with pytest.raises(TransportError) as excinfo:
        RequestExecutor(stub).execute(Target("/foo", 200), "http://base/foo", Side.BASE)
    err = excinfo.value
    assert err.status_code == 0
    assert err.category == ErrorCategory.DNS_ERROR
    assert str(err) == "unexpected status code: expected 200, got 0; client: error making http request: dns lookup failed"


def test_cancelled_run_sends_nothing():
    stub = StubHttpClient()
    event = threading.Event()
    event.set()
    with pytest.raises(RunCancelledError):
        RequestExecutor(stub).execute(Target("/foo", 200), "http://base/foo", Side.BASE, cancel_event=event)
    assert stub.requests == []
