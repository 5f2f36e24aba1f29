"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - EndpointId wraps str and is only produced by identifier validation or
      by a decoded record
    - StoreKey is always ENDPOINT_KEY_PREFIX + EndpointId
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EndpointId = NewType("EndpointId", str)
StoreKey = NewType("StoreKey", str)

ENDPOINT_KEY_PREFIX = "endpoint:"


def store_key(identifier: str, prefix: str = ENDPOINT_KEY_PREFIX) -> StoreKey:
    return StoreKey(prefix + identifier)


# ─── Enums ───────────────────────────────────────────────────────

class SaveOutcome(str, Enum):
    """Result of writing a record; maps to the POST status code."""
    CREATED = "created"
    UPDATED = "updated"


class EndpointField(str, Enum):
    """Field names shared by the wire payload and the stored hash."""
    IDENTIFIER = "identifier"
    URL = "url"
    METHOD = "method"
    STATUS_ONLINE = "status_online"
    FREQUENCY = "frequency"
    FAIL_AFTER = "fail_after"
