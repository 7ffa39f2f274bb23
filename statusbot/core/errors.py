"""Error Hierarchy: typed, categorized exceptions for all StatusBot failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StatusBotError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields travel with the error,
      not with the logging framework
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
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    team: str | None = None
    event_type: str | None = None
    debug_info: dict[str, Any] | None = None


class StatusBotError(Exception):
    """Base exception for all StatusBot errors."""

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
                    "user_id": self.context.user_id,
                    "team": self.context.team,
                    "event_type": self.context.event_type,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class DuplicateTeamError(StatusBotError):
    """A team with the requested name already exists."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Team '{name}' already exists",
            "DUPLICATE_TEAM", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.name = name


class WebhookVerificationError(StatusBotError):
    """Registration handshake carried an unexpected verification token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Verification token mismatch",
            "WEBHOOK_VERIFICATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(StatusBotError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class SlackAPIError(StatusBotError):
    """Slack Web API call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Slack API error ({api_error_type}): {message}",
            "SLACK_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.api_error_type = api_error_type
