"""Application exception hierarchy.

Every failure the request pipeline can detect is expressed as one of these
exceptions. The API layer registers a handler for the base class that turns
any of them into a ``{"success": false, "message": ...}`` envelope, using
``status_code`` as the HTTP status.

Key components:
- **ErrorCode enum**: Standardized error identifiers for logs
- **Severity enum**: Error classification for log levels
- **LambdaPostsError**: Base exception carrying code, status and context
- **Specialized exceptions**: Validation, not-found and store failures
"""

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for the application."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred in the system."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """A request body is missing required fields."""

    NOT_FOUND = "NOT_FOUND"
    """The entity addressed by a path id does not exist."""

    STORE_ERROR = "STORE_ERROR"
    """The data store rejected an operation."""


class Severity(Enum):
    """Severity levels used to pick how loudly an error is logged."""

    LOW = "LOW"
    """Caused by client input; part of normal operation."""

    MEDIUM = "MEDIUM"
    """Unexpected but contained to a single request."""

    HIGH = "HIGH"
    """A dependency such as the database is failing."""


class LambdaPostsError(Exception):
    """Base exception class for all application exceptions.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
        message: Human-readable message sent to the client
        status_code: HTTP status used when the error reaches the API boundary
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information for logs
        cause: The original exception that caused this error
    """

    status_code: int = 500

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    @property
    def is_expected(self) -> bool:
        """Whether the error is a normal outcome of client input.

        Returns:
            bool: True for LOW severity errors.
        """
        return self.severity is Severity.LOW

    def __str__(self) -> str:
        """Return a string representation of the exception.

        Returns:
            str: A formatted string containing the error code and message
        """
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return a detailed representation of the exception.

        Returns:
            str: Class name, error code, message, severity and context
        """
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(LambdaPostsError):
    """Raised when a request body lacks a required, truthy field."""

    status_code = 400

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class NotFoundError(LambdaPostsError):
    """Raised when a path id does not resolve to an entity."""

    status_code = 404

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.NOT_FOUND,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)

    @classmethod
    def for_entity(cls, entity: str, entity_id: object) -> "NotFoundError":
        """Build the not-found error for an entity name such as ``"user"``.

        Args:
            entity: Singular entity name used in the message.
            entity_id: The raw id that failed to resolve.

        Returns:
            NotFoundError: Error with the standard client message.
        """
        return cls(
            f"Could not find a {entity} by that id.",
            context={"entity": entity, "entity_id": str(entity_id)},
        )


class StoreError(LambdaPostsError):
    """Raised when the data store rejects an operation.

    Repositories wrap driver and ORM errors in this type so the API layer
    never has to know about SQLAlchemy.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.STORE_ERROR,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.HIGH, context, cause)
