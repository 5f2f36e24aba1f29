"""Error Hierarchy - verifies codes, statuses and log extras."""

import pytest

from endpoint_registry.core.errors import (
    CorruptRecordError, ErrorCategory, ErrorContext, ErrorSeverity,
    IdentifierMismatchError,
    InvalidIdentifierError, MalformedPayloadError, RegistryError,
    ResourceNotFoundError, StoreUnavailableError,
)


@pytest.mark.parametrize("error, code, status", [
    (InvalidIdentifierError("/endpoints/X", "^x$"), "INVALID_IDENTIFIER", 400),
    (MalformedPayloadError("bad"), "MALFORMED_PAYLOAD", 400),
    (IdentifierMismatchError("a-b", "c-d"), "IDENTIFIER_MISMATCH", 400),
    (ResourceNotFoundError("Endpoint", "a-b"), "RESOURCE_NOT_FOUND", 404),
    (CorruptRecordError("bad"), "CORRUPT_RECORD", 500),
    (StoreUnavailableError("refused", "hgetall"), "STORE_UNAVAILABLE", 500),
])
def test_codes_and_statuses(error, code, status):
    assert isinstance(error, RegistryError)
    assert error.code == code
    assert error.http_status == status


def test_store_errors_share_category():
    assert CorruptRecordError("x").category == ErrorCategory.STORE
    assert StoreUnavailableError("x", "hset").category == ErrorCategory.STORE


def test_mismatch_message_names_both_identifiers():
    err = IdentifierMismatchError("path-id", "body-id")
    assert "path-id" in err.message
    assert "body-id" in err.message


def test_log_extra_includes_context():
    err = StoreUnavailableError(
        "refused", "hgetall",
        ErrorContext(identifier="my-service", store_key="endpoint:my-service"),
    )
    extra = err.log_extra()
    assert extra["error_code"] == "STORE_UNAVAILABLE"
    assert extra["identifier"] == "my-service"
    assert extra["store_key"] == "endpoint:my-service"


def test_log_extra_omits_empty_context():
    extra = MalformedPayloadError("bad").log_extra()
    assert "identifier" not in extra
    assert "store_key" not in extra


def test_enums_only_carry_used_members():
    assert {s.value for s in ErrorSeverity} == {"warning", "error", "critical"}
    assert {c.value for c in ErrorCategory} == {
        "validation", "business_rule", "resource_not_found", "store",
    }
