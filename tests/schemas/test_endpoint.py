"""Endpoint Record - verifies the structured (JSON) and flat (hash) mappings.

Tests:
    - Structured decode of the documented example and its exact re-encoding
    - Malformed bodies raise MalformedPayloadError
    - Flat form is all strings and decodes leniently for numbers only
    - Both mappings round-trip for a spread of valid records
"""

import json
import logging
from datetime import timedelta

import pytest
from pydantic import ValidationError

from endpoint_registry.core.errors import CorruptRecordError, MalformedPayloadError
from endpoint_registry.schemas.endpoint import Endpoint
from tests.factories import make_endpoint


def test_from_json_decodes_example(payload):
    endpoint = Endpoint.from_json(json.dumps(payload))
    assert endpoint.identifier == "my-service"
    assert str(endpoint.url) == "https://example.com/health"
    assert endpoint.method == "GET"
    assert endpoint.status_online == 200
    assert endpoint.frequency == timedelta(seconds=30)
    assert endpoint.fail_after == 3


def test_to_payload_reproduces_example(payload):
    assert Endpoint.from_json(json.dumps(payload)).to_payload() == payload


def test_to_json_uses_wire_field_names(endpoint):
    assert set(json.loads(endpoint.to_json())) == {
        "identifier", "url", "method", "status_online", "frequency", "fail_after",
    }


def test_frequency_is_rendered_canonically(payload):
    payload["frequency"] = "90s"
    assert Endpoint.from_json(json.dumps(payload)).to_payload()["frequency"] == "1m30s"


def test_method_is_stored_verbatim(payload):
    payload["method"] = "purge"
    assert Endpoint.from_json(json.dumps(payload)).method == "purge"


@pytest.mark.parametrize("field, value", [
    ("url", "not a url"),
    ("url", "/relative/path"),
    ("url", 42),
    ("frequency", "soon"),
    ("frequency", 30),
    ("frequency", "999ns"),
    ("url", "mailto:ops@example.com"),
    ("status_online", 70_000),
    ("status_online", -1),
    ("status_online", "200"),
    ("status_online", 200.5),
    ("status_online", True),
    ("fail_after", 256),
    ("fail_after", "3"),
    ("identifier", "My-Service"),
    ("identifier", "x"),
    ("method", 1),
])
def test_from_json_rejects_bad_field(payload, field, value):
    payload[field] = value
    with pytest.raises(MalformedPayloadError):
        Endpoint.from_json(json.dumps(payload))


@pytest.mark.parametrize("missing", [
    "identifier", "url", "method", "status_online", "frequency", "fail_after",
])
def test_from_json_rejects_missing_field(payload, missing):
    del payload[missing]
    with pytest.raises(MalformedPayloadError):
        Endpoint.from_json(json.dumps(payload))


@pytest.mark.parametrize("body", ["", "{", "[]", "null", '"my-service"'])
def test_from_json_rejects_non_object(body):
    with pytest.raises(MalformedPayloadError):
        Endpoint.from_json(body)


def test_to_fields_is_all_strings(endpoint):
    assert endpoint.to_fields() == {
        "identifier": "my-service",
        "url": "https://example.com/health",
        "method": "GET",
        "status_online": "200",
        "frequency": "30s",
        "fail_after": "3",
    }


def test_from_fields_parses_store_hash(endpoint):
    assert Endpoint.from_fields({
        "identifier": "my-service",
        "url": "https://example.com/health",
        "method": "GET",
        "status_online": "200",
        "frequency": "30s",
        "fail_after": "3",
    }) == endpoint


@pytest.mark.parametrize("field, raw", [
    ("status_online", "abc"),
    ("status_online", ""),
    ("status_online", "70000"),
    ("fail_after", "-1"),
    ("fail_after", "300"),
    ("fail_after", "3.5"),
    ("status_online", " 200 "),
    ("status_online", "2_00"),
    ("status_online", "٢٠٠"),
    ("fail_after", "+"),
])
def test_from_fields_defaults_unparsable_numbers_to_zero(endpoint, field, raw, caplog):
    fields = endpoint.to_fields()
    fields[field] = raw
    with caplog.at_level(logging.WARNING):
        decoded = Endpoint.from_fields(fields)
    assert getattr(decoded, field) == 0
    assert any(field in record.getMessage() for record in caplog.records)


def test_from_fields_defaults_missing_numbers_to_zero(endpoint):
    fields = endpoint.to_fields()
    del fields["fail_after"]
    assert Endpoint.from_fields(fields).fail_after == 0


@pytest.mark.parametrize("field, raw", [
    ("url", "::not-a-url"),
    ("frequency", "every now and then"),
    ("identifier", "Not-Valid"),
])
def test_from_fields_rejects_corrupt_values(endpoint, field, raw):
    fields = endpoint.to_fields()
    fields[field] = raw
    with pytest.raises(CorruptRecordError):
        Endpoint.from_fields(fields)


@pytest.mark.parametrize("missing", ["identifier", "url", "method", "frequency"])
def test_from_fields_rejects_missing_text_fields(endpoint, missing):
    fields = endpoint.to_fields()
    del fields[missing]
    with pytest.raises(CorruptRecordError):
        Endpoint.from_fields(fields)


ROUND_TRIP_RECORDS = [
    make_endpoint("ab"),
    make_endpoint("edge-max", status_online=65_535, fail_after=255),
    make_endpoint("edge-min", status_online=0, fail_after=0, frequency="0s"),
    make_endpoint("slow-probe", frequency="1h30m", method="HEAD"),
    make_endpoint("fast-probe", frequency="250ms", url="http://10.0.0.1:8080/ping?x=1"),
]


@pytest.mark.parametrize("record", ROUND_TRIP_RECORDS, ids=lambda r: r.identifier)
def test_structured_round_trip(record):
    assert Endpoint.from_json(record.to_json()) == record


@pytest.mark.parametrize("record", ROUND_TRIP_RECORDS, ids=lambda r: r.identifier)
def test_flat_round_trip(record):
    assert Endpoint.from_fields(record.to_fields()) == record


def test_record_is_immutable(endpoint):
    with pytest.raises(ValidationError):
        endpoint.fail_after = 10


def test_from_fields_accepts_signed_number(endpoint):
    fields = {**endpoint.to_fields(), "fail_after": "+5"}
    assert Endpoint.from_fields(fields).fail_after == 5


@pytest.mark.parametrize("url", [
    "https://example.com",
    "HTTPS://Example.com:443/Health",
    "http://10.0.0.1:8080/ping?x=1",
])
def test_url_is_kept_as_submitted(payload, url):
    payload["url"] = url
    endpoint = Endpoint.from_json(json.dumps(payload))
    assert endpoint.url == url
    assert endpoint.to_payload()["url"] == url
    assert endpoint.to_fields()["url"] == url
