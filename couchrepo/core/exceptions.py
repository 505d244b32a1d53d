"""
Exception hierarchy for the couchrepo data-access layer.

Provides layered exception structure for store, view and precondition errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the repository layer
"""

from typing import Any


class CouchRepositoryException(Exception):
    """Base exception for all couchrepo errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DocumentNotFoundError(CouchRepositoryException):
    """Raised when the store has no record for the requested id."""

    def __init__(self, doc_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize document not found error.

        Args:
            doc_id: ID of the missing document
            details: Additional context
        """
        details = details or {}
        details["doc_id"] = doc_id
        self.doc_id = doc_id
        super().__init__(f"Document not found: {doc_id}", details)


class PreconditionFailedError(CouchRepositoryException):
    """Raised before any I/O when a call is malformed."""

    pass


class InvalidArgumentError(PreconditionFailedError):
    """Raised when an argument does not satisfy an operation's preconditions."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid argument error.

        Args:
            message: Error message
            argument: Name of the offending argument or field
            details: Additional context
        """
        details = details or {}
        if argument:
            details["argument"] = argument
        super().__init__(message, details)


class InvalidInvocationError(PreconditionFailedError):
    """Raised when a query method is called with an unusable signature."""

    def __init__(
        self,
        message: str,
        method_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if method_name:
            details["method_name"] = method_name
        super().__init__(message, details)


class StoreError(CouchRepositoryException):
    """Raised when a store round trip fails for any reason other than a miss."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            status_code: HTTP status returned by the store, if any
            operation: Operation that failed (get, insert, destroy, view, ...)
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        if operation:
            details["operation"] = operation
        self.status_code = status_code
        self.operation = operation
        super().__init__(message, details)


class RevisionConflictError(StoreError):
    """Raised when the store rejects a write against a stale revision."""

    pass


class ViewExecutionError(CouchRepositoryException):
    """Raised when a view query fails and the error policy is to propagate."""

    def __init__(
        self,
        message: str,
        view_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if view_name:
            details["view_name"] = view_name
        self.view_name = view_name
        super().__init__(message, details)


class ViewDefinitionError(CouchRepositoryException):
    """Raised when a view definition source cannot be turned into query methods."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if source:
            details["source"] = source
        super().__init__(message, details)
