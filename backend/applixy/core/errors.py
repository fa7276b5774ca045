"""Error Hierarchy — typed, categorized exceptions for all Applixy failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces REST envelope; to_sse_event() produces SSE envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ApplixyError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - "Mapping defaulted" is NOT an exception — it travels as DecodeResult.defaulted
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    MAPPING = "mapping"
    TRANSPORT = "transport"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection: str | None = None
    document_id: str | None = None
    user_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class ApplixyError(Exception):
    """Base exception for all Applixy errors."""

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

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "collection": self.context.collection,
                    "document_id": self.context.document_id,
                },
            }
        }

    def to_sse_event(self) -> dict:
        """Convert to SSE error event."""
        return {
            "type": "error",
            "data": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "severity": self.severity.value,
                "recoverable": self.severity in (
                    ErrorSeverity.INFO, ErrorSeverity.WARNING,
                ),
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(ApplixyError):
    """A submission form is missing required fields. Raised before any IO."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Missing required field(s): {', '.join(fields)}",
            "VALIDATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.fields = fields


class AuthRequiredError(ApplixyError):
    """A write needs an identity and none could be obtained."""
    def __init__(self, message: str = "Sign-in required", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTH_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, 401,
        )


class InvalidCredentialsError(ApplixyError):
    """Email/password sign-in rejected."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email or password", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class AccountExistsError(ApplixyError):
    """An account with this email already exists."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            f"An account for '{email}' already exists", "ACCOUNT_EXISTS",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context, 409,
        )
        self.email = email


class ResourceNotFoundError(ApplixyError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class MappingSkipped(ApplixyError):
    """A raw document could not be decoded at all. Absorbed by the snapshot decoder."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Document skipped: {reason}", "MAPPING_SKIPPED",
            ErrorCategory.MAPPING, ErrorSeverity.INFO, context, 422,
        )
        self.reason = reason


# ─── Infrastructure Errors (500-level) ──────────────────────────

class TransportError(ApplixyError):
    """Store or network unavailable."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        if ctx.user_message is None:
            ctx.user_message = "Could not reach the server. Please try again."
        super().__init__(
            f"Store {operation} failed: {message}",
            "TRANSPORT_ERROR", ErrorCategory.TRANSPORT,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
