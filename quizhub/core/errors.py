"""Error Hierarchy — typed, categorized exceptions for all QuizHub failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; store errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with QuizHubError base: FastAPI global handler catches all
    - AlreadyEnrolledError reports 404, not 409: clients already branch on the
      not-found channel for enrollment, so the status is kept
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
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection: str | None = None
    document_id: str | None = None
    debug_info: dict[str, Any] | None = None


class QuizHubError(Exception):
    """Base exception for all QuizHub errors."""

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
                    "collection": self.context.collection,
                    "document_id": self.context.document_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(QuizHubError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AlreadyEnrolledError(QuizHubError):
    """User's quiz list already contains the quiz."""
    def __init__(self, user_id: str, quiz_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"User '{user_id}' is already enrolled in quiz '{quiz_id}'",
            "ALREADY_ENROLLED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 404,
        )
        self.user_id = user_id
        self.quiz_id = quiz_id


# ─── Store Errors (500-level) ───────────────────────────────────

class DocumentStoreError(QuizHubError):
    """Document store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Document store {operation} failed: {message}",
            "DOCUMENT_STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class DocumentNotFoundError(DocumentStoreError):
    """Write targeted a document that does not exist."""
    def __init__(self, collection: str, document_id: str):
        super().__init__(
            f"no document '{document_id}' in '{collection}'", "update",
            ErrorContext(collection=collection, document_id=document_id),
        )


class ConcurrencyError(QuizHubError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
