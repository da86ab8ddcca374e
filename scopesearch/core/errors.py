"""Error Hierarchy — typed, categorized exceptions for search construction failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Configuration errors surface at first use and are never swallowed:
      an empty searchable set would silently match nothing
    - An absent or empty search term is not an error

Design Decisions:
    - Single hierarchy with ScopeSearchError base: callers catch one type
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Where in the search declaration the failure was found."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    table: str | None = None
    relation: str | None = None
    column: str | None = None
    debug_info: dict[str, Any] | None = None


class ScopeSearchError(Exception):
    """Base exception for all scopesearch errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to a serializable error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entity": self.context.entity,
                    "table": self.context.table,
                    "relation": self.context.relation,
                    "column": self.context.column,
                },
            }
        }


# ─── Configuration Errors ───────────────────────────────────────

class SearchConfigurationError(ScopeSearchError):
    """Search declaration does not match the mapped schema."""
    def __init__(
        self,
        message: str,
        code: str = "SEARCH_CONFIGURATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFIGURATION,
            ErrorSeverity.ERROR, context,
        )


class UnknownTableError(SearchConfigurationError):
    """Persistence layer cannot list columns for the table."""
    def __init__(self, table: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.table = table
        super().__init__(f"Table '{table}' not found", "UNKNOWN_TABLE", ctx)
        self.table = table


class UnknownColumnError(SearchConfigurationError):
    """Searchable field is not a mapped column of the entity."""
    def __init__(
        self, entity: str, column: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = entity
        ctx.column = column
        super().__init__(
            f"Column '{column}' is not mapped on {entity}",
            "UNKNOWN_COLUMN", ctx,
        )
        self.column = column


class UnknownRelationError(SearchConfigurationError):
    """Declared relationship is not defined on the entity."""
    def __init__(
        self, entity: str, relation: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = entity
        ctx.relation = relation
        super().__init__(
            f"Relationship '{relation}' is not defined on {entity}",
            "UNKNOWN_RELATION", ctx,
        )
        self.relation = relation


class MalformedTargetError(SearchConfigurationError):
    """Search target is neither a field name nor a non-empty group of names."""
    def __init__(self, target: Any, context: ErrorContext | None = None):
        super().__init__(
            f"Malformed search target: {target!r}",
            "MALFORMED_TARGET", context,
        )
        self.target = target


class NotSearchableError(SearchConfigurationError):
    """Entity does not implement the searchable capability."""
    def __init__(self, entity: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity = entity
        super().__init__(
            f"{entity} does not declare searchable configuration",
            "NOT_SEARCHABLE", ctx,
        )


class NoStatementEntityError(SearchConfigurationError):
    """Select statement returns no ORM entity to search on."""
    def __init__(self, columns: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"columns": columns}
        super().__init__(
            "Statement selects no ORM entity; pass entity explicitly",
            "NO_STATEMENT_ENTITY", ctx,
        )


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(ScopeSearchError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
