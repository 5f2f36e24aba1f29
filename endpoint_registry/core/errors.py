"""Error Hierarchy - typed, categorized exceptions for every registry failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
      and the HTTP status the API answers with
    - Client errors (400-level) are recoverable; store errors (500-level) are critical
    - Responses never carry a body; code and context only reach the logs

Design Decisions:
    - Single hierarchy with RegistryError base: one FastAPI handler catches all
    - ErrorContext as dataclass: log extras without coupling to the logging setup
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE = "store"


@dataclass
class ErrorContext:
    """Context attached to an error for log output."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    identifier: str | None = None
    store_key: str | None = None
    debug_info: dict[str, Any] | None = None


class RegistryError(Exception):
    """Base exception for all registry errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def log_extra(self) -> dict:
        """Fields merged into the log record by the API error handler."""
        extra: dict[str, Any] = {
            "error_code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
        }
        if self.context.identifier is not None:
            extra["identifier"] = self.context.identifier
        if self.context.store_key is not None:
            extra["store_key"] = self.context.store_key
        return extra


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidIdentifierError(RegistryError):
    """Request path does not carry an identifier matching the grammar."""
    def __init__(self, path: str, pattern: str, context: ErrorContext | None = None):
        super().__init__(
            f'endpoint "{path}" does not match pattern "{pattern}"',
            "INVALID_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.path = path
        self.pattern = pattern


class MalformedPayloadError(RegistryError):
    """Request body cannot be decoded into an endpoint record."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"parse JSON body: {message}",
            "MALFORMED_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class IdentifierMismatchError(RegistryError):
    """Update addressed one identifier in the path and another in the body."""
    def __init__(
        self, path_identifier: str, body_identifier: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"identifier mismatch: (resource: {path_identifier}, body: {body_identifier})",
            "IDENTIFIER_MISMATCH", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.path_identifier = path_identifier
        self.body_identifier = body_identifier


class ResourceNotFoundError(RegistryError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Store Errors (500-level) ───────────────────────────────────

class CorruptRecordError(RegistryError):
    """Stored fields cannot be decoded into an endpoint record."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"parse endpoint from store: {message}",
            "CORRUPT_RECORD", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class StoreUnavailableError(RegistryError):
    """Key-value store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
