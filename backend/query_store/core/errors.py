"""Error Hierarchy — typed, categorized exceptions for all query store failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status it maps to
    - to_response() produces a free-text body: {"error": message}
    - Nothing here is retried; every error ends the current request

Design Decisions:
    - Single hierarchy with QueryStoreError base: one FastAPI handler catches all
    - code/category/severity stay server-side (logs only), callers get status + message
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for logging and handling."""
    CONFIGURATION = "configuration"
    AUTHORIZATION = "authorization"
    EXTERNAL_API = "external_api"
    METHOD = "method"


@dataclass
class ErrorContext:
    """Context attached to an error for log correlation."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    backend: str | None = None
    operation: str | None = None


class QueryStoreError(Exception):
    """Base exception for all query store errors."""

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
        """Convert to the JSON error body returned to callers."""
        return {"error": self.message}


# ─── Caller Errors (400-level) ──────────────────────────────────

class AuthorizationError(QueryStoreError):
    """Write attempted without the configured admin token."""
    def __init__(self, message: str = "Unauthorized", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class MethodNotSupportedError(QueryStoreError):
    """HTTP method other than GET/POST on the record endpoint."""
    def __init__(self, method: str, context: ErrorContext | None = None):
        super().__init__(
            "Method Not Allowed", "METHOD_NOT_ALLOWED", ErrorCategory.METHOD,
            ErrorSeverity.WARNING, context, 405,
        )
        self.method = method


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConfigurationError(QueryStoreError):
    """Required settings for the selected backend are missing or invalid."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class ProviderError(QueryStoreError):
    """Storage backend returned a non-success status or the call raised."""
    def __init__(
        self, message: str, backend: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.backend = backend
        super().__init__(
            message, "PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.backend = backend


class SheetForwardError(QueryStoreError):
    """Spreadsheet endpoint rejected or failed a forwarded payload.

    Only ever logged: forwarding is best-effort and never gates a response.
    """
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "SHEET_FORWARD_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, 502,
        )
