"""Error Hierarchy — typed, categorized exceptions for risk calculation failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - PreconditionError / ClassificationError are never recovered locally
    - RollbackFailure is logged by the updater and never raised over the original error
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with RiskCoreError base: one global FastAPI handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    BUSINESS_RULE = "business_rule"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    risk_level: str | None = None
    field_name: str | None = None
    debug_info: dict[str, Any] | None = None


class RiskCoreError(Exception):
    """Base exception for all risk core errors."""

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
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "risk_level": self.context.risk_level,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Domain Errors ──────────────────────────────────────────────

class PreconditionError(RiskCoreError):
    """A timestamp or token required by a check was never recorded."""
    def __init__(self, message: str, missing: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = missing
        super().__init__(
            message, "PRECONDITION_FAILED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.missing = missing


class ClassificationError(RiskCoreError):
    """Scoring configuration is inconsistent with the computed score."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CLASSIFICATION_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 500,
        )


# ─── Infrastructure Errors ──────────────────────────────────────

class PersistenceError(RiskCoreError):
    """A read or write against the risk state store failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Risk state {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class RollbackFailure(RiskCoreError):
    """A compensating action failed while undoing a partial update."""
    def __init__(
        self, field_name: str, cause: Exception, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_name = field_name
        super().__init__(
            f"Rollback of '{field_name}' failed: {cause}",
            "ROLLBACK_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.cause = cause
