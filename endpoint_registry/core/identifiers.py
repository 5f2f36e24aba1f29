"""Identifier Validation - extracts endpoint identifiers from request paths.

Invariants:
    - An identifier starts with a lowercase letter followed by one or more
      lowercase letters, digits or hyphens (minimum length 2)
    - The whole path must match: no trailing slash, no nested segments
    - Pure functions, no IO
"""

import re

from endpoint_registry.core.domain_types import EndpointId
from endpoint_registry.core.errors import InvalidIdentifierError, ErrorContext

IDENTIFIER_PATTERN = r"[a-z][-a-z0-9]+"
ENDPOINT_PATH_PATTERN = rf"^/endpoints/({IDENTIFIER_PATTERN})$"

_identifier_re = re.compile(rf"^{IDENTIFIER_PATTERN}$")
_endpoint_path_re = re.compile(ENDPOINT_PATH_PATTERN)


def is_valid_identifier(value: str) -> bool:
    """Check a bare identifier against the naming grammar."""
    return _identifier_re.fullmatch(value) is not None


def extract_identifier(path: str) -> EndpointId:
    """Extract the identifier from a /endpoints/<id> path.

    Raises InvalidIdentifierError carrying the rejected path and the grammar.
    """
    match = _endpoint_path_re.fullmatch(path)
    if match is None:
        raise InvalidIdentifierError(
            path, ENDPOINT_PATH_PATTERN,
            ErrorContext(debug_info={"path": path}),
        )
    return EndpointId(match.group(1))
