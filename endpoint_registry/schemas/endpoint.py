"""Endpoint Record - configuration of one monitored target and its two mappings.

Invariants:
    - All six fields are always present together; a record is never partial
    - Structured form: JSON object, numbers as numbers, frequency as a duration
      string, url as a URL string
    - Flat form: the same six fields as str -> str pairs for the store hash
    - Both mappings round-trip: decode(encode(r)) == r
    - Decoding the structured form is strict (MalformedPayloadError); decoding
      the flat form falls back to 0 for unparsable numbers (warning logged)

Design Decisions:
    - frozen model: a record is replaced, never mutated in place
    - url validated as an absolute URL but stored as submitted (no trailing
      slash added to a bare host)
    - Strict ints on the wire: "200" and true are rejected, as are floats
    - Body identifier checked against the path grammar so every stored record
      stays addressable through GET /endpoints/{id}
"""

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import Annotated, Any

from pydantic import (
    AfterValidator, AnyUrl, BaseModel, BeforeValidator, ConfigDict, Field,
    PlainSerializer, TypeAdapter, UrlConstraints, ValidationError,
)

from endpoint_registry.core.domain_types import EndpointField
from endpoint_registry.core.durations import format_duration, parse_duration
from endpoint_registry.core.errors import (
    CorruptRecordError, ErrorContext, MalformedPayloadError,
)
from endpoint_registry.core.identifiers import IDENTIFIER_PATTERN

logger = logging.getLogger(__name__)

MAX_STATUS_ONLINE = 65_535
MAX_FAIL_AFTER = 255


def _coerce_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, str):
        return parse_duration(value)
    raise ValueError("frequency must be a duration string")


Duration = Annotated[
    timedelta,
    BeforeValidator(_coerce_duration),
    PlainSerializer(format_duration, return_type=str),
]

_absolute_url = TypeAdapter(Annotated[AnyUrl, UrlConstraints(host_required=True)])


def _check_url(value: str) -> str:
    """Require scheme and host; keep the text as submitted."""
    try:
        _absolute_url.validate_python(value)
    except ValidationError as e:
        raise ValueError(e.errors()[0]["msg"]) from None
    return value


EndpointUrl = Annotated[str, AfterValidator(_check_url)]


class Endpoint(BaseModel):
    """One monitored endpoint's configuration."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(pattern=rf"^{IDENTIFIER_PATTERN}$")
    url: EndpointUrl
    method: str
    status_online: int = Field(ge=0, le=MAX_STATUS_ONLINE, strict=True)
    frequency: Duration
    fail_after: int = Field(ge=0, le=MAX_FAIL_AFTER, strict=True)

    # ─── Structured form ─────────────────────────────────────────

    @classmethod
    def from_json(cls, data: str | bytes) -> "Endpoint":
        """Decode a request body. Raises MalformedPayloadError."""
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise MalformedPayloadError(_summarize(e)) from e

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return self.model_dump_json()

    # ─── Flat form ───────────────────────────────────────────────

    def to_fields(self) -> dict[str, str]:
        """Render as the string-valued hash written to the store."""
        return {
            EndpointField.IDENTIFIER.value: self.identifier,
            EndpointField.URL.value: self.url,
            EndpointField.METHOD.value: self.method,
            EndpointField.STATUS_ONLINE.value: str(self.status_online),
            EndpointField.FREQUENCY.value: format_duration(self.frequency),
            EndpointField.FAIL_AFTER.value: str(self.fail_after),
        }

    @classmethod
    def from_fields(cls, fields: Mapping[str, str]) -> "Endpoint":
        """Decode a stored hash. Raises CorruptRecordError.

        status_online and fail_after fall back to 0 when they do not parse.
        Whether that lenience is wanted is an open question; it is kept
        as-is and reported through a warning.
        """
        identifier = fields.get(EndpointField.IDENTIFIER.value)
        context = ErrorContext(identifier=identifier)
        missing = [
            f.value for f in (
                EndpointField.IDENTIFIER, EndpointField.URL,
                EndpointField.METHOD, EndpointField.FREQUENCY,
            )
            if f.value not in fields
        ]
        if missing:
            raise CorruptRecordError(
                f"missing fields: {', '.join(missing)}", context,
            )
        try:
            return cls(
                identifier=fields[EndpointField.IDENTIFIER.value],
                url=fields[EndpointField.URL.value],
                method=fields[EndpointField.METHOD.value],
                status_online=_lenient_uint(
                    fields, EndpointField.STATUS_ONLINE, MAX_STATUS_ONLINE,
                ),
                frequency=fields[EndpointField.FREQUENCY.value],
                fail_after=_lenient_uint(
                    fields, EndpointField.FAIL_AFTER, MAX_FAIL_AFTER,
                ),
            )
        except ValidationError as e:
            raise CorruptRecordError(_summarize(e), context) from e


def _lenient_uint(
    fields: Mapping[str, str], name: EndpointField, upper: int,
) -> int:
    raw = fields.get(name.value, "")
    digits = raw[1:] if raw[:1] in ("+", "-") else raw
    # ASCII digits with an optional sign only
    value = int(raw) if digits.isascii() and digits.isdigit() else -1
    if not 0 <= value <= upper:
        logger.warning(
            f"stored {name.value}={raw!r} is not a number in 0..{upper}, using 0",
            extra={"identifier": fields.get(EndpointField.IDENTIFIER.value)},
        )
        return 0
    return value


def _summarize(exc: ValidationError) -> str:
    """One-line summary of a pydantic ValidationError for logs."""
    return "; ".join(
        f"{'.'.join(str(loc) for loc in err['loc']) or 'body'}: {err['msg']}"
        for err in exc.errors()
    )
