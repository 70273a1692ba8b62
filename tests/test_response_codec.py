import json

import pytest

from shield_client.exceptions import ShieldCallError
from shield_client.protocol import (
    ApplicationError,
    FailureKind,
    ProtocolError,
    Success,
    decode_response,
    encode_request,
    get_supported_yield_ids_request,
    hash_request,
)


def test_success_with_yield_ids():
    outcome = decode_response(b'{"ok":true,"result":{"yieldIds":["a","b"]}}')

    assert isinstance(outcome, Success)
    assert outcome.ok is True
    assert outcome.result.yield_ids == ["a", "b"]
    assert not hasattr(outcome, "error")


def test_application_error_is_surfaced():
    outcome = decode_response(
        b'{"ok":false,"error":{"code":"UNSUPPORTED_YIELD","message":"unknown id"}}'
    )

    assert isinstance(outcome, ApplicationError)
    assert outcome.ok is False
    assert outcome.kind is FailureKind.APPLICATION_ERROR
    assert outcome.code == "UNSUPPORTED_YIELD"
    assert outcome.message == "unknown id"
    assert not hasattr(outcome, "result")


def test_validate_result_fields_map_from_camel_case():
    outcome = decode_response(
        json.dumps(
            {
                "ok": True,
                "apiVersion": "1.0",
                "result": {"isValid": False, "reason": "wrong receiver", "details": {"to": "0x0"}},
                "meta": {"requestHash": "unavailable"},
            }
        ).encode()
        + b"\n"
    )

    assert isinstance(outcome, Success)
    assert outcome.result.is_valid is False
    assert outcome.result.reason == "wrong receiver"
    assert outcome.result.details == {"to": "0x0"}
    assert outcome.result.detected_type is None


@pytest.mark.parametrize(
    "raw",
    [
        b"not json at all",
        b'{"result":{"yieldIds":[]}}',
        b"[1, 2, 3]",
        b'{"ok":"true","result":{}}',
        b'{"ok":true}',
        b'{"ok":true,"result":{},"error":{"code":"X","message":"y"}}',
        b'{"ok":false}',
        b'{"ok":false,"error":{"code":"X"}}',
        b'{"ok":false,"result":{},"error":{"code":"X","message":"y"}}',
        b'{"ok":true,"result":{"isValid":"yes"}}',
        b"",
        b"   \n",
        b"\xff\xfe",
    ],
)
def test_malformed_output_is_a_protocol_error(raw):
    outcome = decode_response(raw)

    assert isinstance(outcome, ProtocolError)
    assert outcome.kind is FailureKind.PROTOCOL_ERROR
    assert outcome.message
    assert outcome.raw_output == raw


def test_api_version_mismatch_is_rejected():
    raw = b'{"ok":true,"apiVersion":"2.0","result":{"yieldIds":[]}}'

    assert isinstance(decode_response(raw), Success)
    outcome = decode_response(raw, api_version="1.0")
    assert isinstance(outcome, ProtocolError)
    assert "2.0" in outcome.description


def test_request_hash_is_verified():
    payload = encode_request(get_supported_yield_ids_request())
    good = json.dumps(
        {"ok": True, "result": {"yieldIds": []}, "meta": {"requestHash": hash_request(payload)}}
    ).encode()
    bad = json.dumps(
        {"ok": True, "result": {"yieldIds": []}, "meta": {"requestHash": "0" * 64}}
    ).encode()

    success = decode_response(good, request_bytes=payload)
    assert isinstance(success, Success)
    assert success.request_hash == hash_request(payload)
    assert isinstance(decode_response(bad, request_bytes=payload), ProtocolError)
    assert isinstance(decode_response(bad), Success)


def test_placeholder_hash_is_not_treated_as_mismatch():
    payload = encode_request(get_supported_yield_ids_request())
    raw = (
        b'{"ok":false,"apiVersion":"1.0","error":{"code":"INTERNAL_ERROR",'
        b'"message":"Failed to process request"},"meta":{"requestHash":"unavailable"}}'
    )

    outcome = decode_response(raw, request_bytes=payload, api_version="1.0")

    assert isinstance(outcome, ApplicationError)
    assert outcome.code == "INTERNAL_ERROR"


def test_unwrap():
    success = decode_response(b'{"ok":true,"result":{"yieldIds":["a"]}}')
    failure = decode_response(b'{"ok":false,"error":{"code":"PARSE_ERROR","message":"Invalid JSON syntax"}}')

    assert success.unwrap().yield_ids == ["a"]
    with pytest.raises(ShieldCallError) as excinfo:
        failure.unwrap()
    assert excinfo.value.failure is failure
    assert str(excinfo.value) == "ApplicationError: Invalid JSON syntax"
