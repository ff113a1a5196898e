# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import logging
import socket

import httpx
import pytest

from rovcheck.errors import ErrorCategory, PayloadSchemaError
from rovcheck.http import HttpResponse, StubHttpClient
from rovcheck.models import Endpoint, IsBgpSafeYetPayload
from rovcheck.probe.prober import build_target, classify_response, probe_endpoint

VALID_BODY = {"status": "valid", "asn": 13335, "name": "Cloudflare", "blackholed": False}
TARGET = build_target(Endpoint.VALID, "https://valid.example/", "0123456789")


def _json_response(data, status_code=200):
    return HttpResponse(ok=True, status_code=status_code, content=json.dumps(data).encode(), url=TARGET.url)


def test_build_target_joins_identifier():
    assert TARGET.url == "https://valid.example/0123456789"
    assert TARGET.endpoint is Endpoint.VALID
    assert TARGET.base_url == "https://valid.example/"


def test_schema_json_classifies_as_success():
    outcome = classify_response(TARGET, _json_response(VALID_BODY))
    assert outcome.succeeded is True
    assert outcome.payload == IsBgpSafeYetPayload(status="valid", asn=13335, name="Cloudflare", blackholed=False)
    assert outcome.error_category is ErrorCategory.NONE
    assert "Cloudflare" in outcome.diagnostic


def test_extra_fields_are_ignored():
    outcome = classify_response(TARGET, _json_response({**VALID_BODY, "extra": [1, 2]}))
    assert outcome.succeeded is True


def test_schema_mismatch_fails_despite_200():
    outcome = classify_response(TARGET, _json_response({"unexpected": True}))
    assert outcome.succeeded is False
    assert outcome.status_code == 200
    assert outcome.error_category is ErrorCategory.SCHEMA_ERROR
    assert "missing field" in outcome.diagnostic


@pytest.mark.parametrize(
    "body",
    [
        {**VALID_BODY, "asn": "13335"},
        {**VALID_BODY, "asn": True},
        {**VALID_BODY, "asn": -1},
        {**VALID_BODY, "blackholed": "false"},
        {**VALID_BODY, "name": None},
        [VALID_BODY],
    ],
)
def test_mistyped_payloads_fail(body):
    outcome = classify_response(TARGET, _json_response(body))
    assert outcome.succeeded is False
    assert outcome.error_category is ErrorCategory.SCHEMA_ERROR


def test_non_json_body_fails_with_decode_error():
    outcome = classify_response(TARGET, HttpResponse(ok=True, status_code=200, content=b"<html>blocked</html>"))
    assert outcome.succeeded is False
    assert outcome.error_category is ErrorCategory.DECODE_ERROR


def test_http_error_status_fails_even_with_schema_body():
    outcome = classify_response(TARGET, _json_response(VALID_BODY, status_code=500))
    assert outcome.succeeded is False
    assert outcome.status_code == 500
    assert outcome.error_category is ErrorCategory.HTTP_STATUS


def test_truncated_body_fails():
    response = _json_response(VALID_BODY)
    response.meta["body_truncated"] = True
    outcome = classify_response(TARGET, response)
    assert outcome.succeeded is False
    assert outcome.error_category is ErrorCategory.DECODE_ERROR


@pytest.mark.parametrize(
    ("error", "category"),
    [
        (httpx.ReadTimeout("timed out"), ErrorCategory.TIMEOUT),
        (httpx.ConnectTimeout("timed out"), ErrorCategory.TIMEOUT),
        (httpx.ConnectError("refused"), ErrorCategory.CONNECTION_ERROR),
        (RuntimeError("boom"), ErrorCategory.UNKNOWN_ERROR),
    ],
)
def test_transport_failures_are_categorized(error, category):
    response = HttpResponse(ok=False, error_message=str(error), error_type=type(error).__name__, error=error)
    outcome = classify_response(TARGET, response)
    assert outcome.succeeded is False
    assert outcome.error_category is category


def test_dns_failure_is_detected_through_exception_chain():
    try:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as inner:
            raise httpx.ConnectError("[Errno -2] Name or service not known") from inner
    except httpx.ConnectError as exc:
        error = exc
    outcome = classify_response(TARGET, HttpResponse(ok=False, error_message=str(error), error=error))
    assert outcome.error_category is ErrorCategory.DNS_ERROR


def test_probe_endpoint_uses_stub_and_logs_payload(caplog):
    client = StubHttpClient({TARGET.url: _json_response(VALID_BODY)})
    with caplog.at_level(logging.DEBUG, logger="rovcheck"):
        outcome = probe_endpoint(client, TARGET, 3.0)
    assert outcome.succeeded is True
    assert client.requests[0].url == TARGET.url
    assert client.requests[0].method == "GET"
    assert client.requests[0].timeout == 3.0
    assert "Response from valid" in caplog.text


def test_probe_endpoint_never_raises_and_logs_error(caplog):
    class ExplodingClient:
        def request(self, request):  # noqa: ARG002
            raise httpx.ConnectError("connection refused")

        def close(self):
            return None

    with caplog.at_level(logging.DEBUG, logger="rovcheck"):
        outcome = probe_endpoint(ExplodingClient(), TARGET, 1.0)
    assert outcome.succeeded is False
    assert outcome.error_category is ErrorCategory.CONNECTION_ERROR
    assert "connection refused" in caplog.text


def test_probe_endpoint_accepts_explicit_logger(caplog):
    custom = logging.getLogger("rovcheck.tests.custom")
    client = StubHttpClient()
    with caplog.at_level(logging.DEBUG, logger="rovcheck.tests.custom"):
        outcome = probe_endpoint(client, TARGET, 1.0, log=custom)
    assert outcome.succeeded is False
    assert any(record.name == "rovcheck.tests.custom" for record in caplog.records)


def test_payload_schema_error_is_value_error():
    with pytest.raises(ValueError):
        IsBgpSafeYetPayload.from_mapping({})
    with pytest.raises(PayloadSchemaError):
        IsBgpSafeYetPayload.from_mapping("string")


@pytest.mark.parametrize("status_code", [201, 203, 204])
def test_non_200_success_codes_fail(status_code):
    outcome = classify_response(TARGET, _json_response(VALID_BODY, status_code=status_code))
    assert outcome.succeeded is False
    assert outcome.error_category is ErrorCategory.HTTP_STATUS


def test_invalid_utf8_body_fails_with_decode_error():
    body = b'{"status": "valid", "asn": 13335, "name": "Cloud\xff\xfe", "blackholed": false}'
    response = HttpResponse(ok=True, status_code=200, content=body, text=body.decode("utf-8", errors="replace"))
    outcome = classify_response(TARGET, response)
    assert outcome.succeeded is False
    assert outcome.error_category is ErrorCategory.DECODE_ERROR
