"""Error Hierarchy — typed, categorized exceptions for all Matsuri failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ValidationError is raised before any network call
    - StoreUnavailableError is the single retryable transport condition
    - PartialWriteInconsistency keeps the failing step's message unmodified
    - SigningError never escapes the catalog resolver

Design Decisions:
    - Single hierarchy with MatsuriError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE_UNAVAILABLE = "store_unavailable"
    PARTIAL_WRITE = "partial_write"
    SIGNING = "signing"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    festival_id: str | None = None
    step: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class MatsuriError(Exception):
    """Base exception for all Matsuri errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.retryable = retryable

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "retryable": self.retryable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "festival_id": self.context.festival_id,
                    "step": self.context.step,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(MatsuriError):
    """Required input missing or malformed."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(MatsuriError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(MatsuriError):
    """Query, insert, or upload transport failure."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, "STORE_UNAVAILABLE", ErrorCategory.STORE_UNAVAILABLE,
            ErrorSeverity.CRITICAL, context, 503, retryable=True,
        )
        self.operation = operation


class PartialWriteInconsistency(MatsuriError):
    """A later saga step failed after an earlier step committed."""
    def __init__(
        self,
        message: str,
        failed_step: str,
        committed_steps: list[str],
        orphaned: list[str],
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.step = failed_step
        super().__init__(
            message, "PARTIAL_WRITE", ErrorCategory.PARTIAL_WRITE,
            ErrorSeverity.CRITICAL, ctx, 502,
        )
        self.failed_step = failed_step
        self.committed_steps = committed_steps
        self.orphaned = orphaned


class SigningError(MatsuriError):
    """Signed-URL generation failed for one stored object."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            message, "SIGNING_FAILED", ErrorCategory.SIGNING,
            ErrorSeverity.WARNING, context, 502,
        )
        self.path = path
