"""
Custom exceptions for consistent error reporting.

Every failure raised by the ledger core carries a stable error code so the
calling layer can translate it without inspecting messages.
"""

from http import HTTPStatus
from typing import Any, Dict


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Standard error payload."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ValidationFailedError(AppException):
    """Raised when input is rejected before anything is written."""

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_VALIDATION_001",
            status_code=HTTPStatus.BAD_REQUEST,
            details=details
        )


class ResourceNotFoundError(AppException):
    """Raised when a referenced resource is missing or logically deleted."""

    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=HTTPStatus.NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


class PreconditionFailedError(AppException):
    """Raised when the target is in a state that forbids the operation."""

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_PRECONDITION_001",
            status_code=HTTPStatus.CONFLICT,
            details=details
        )


class StorageFailureError(AppException):
    """Raised when the store fails inside a unit of work. Nothing was committed."""

    def __init__(self, message: str = "Storage failure, no changes were committed", retryable: bool = False):
        super().__init__(
            message=message,
            error_code="ERR_STORAGE_001",
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            details={"retryable": retryable}
        )

    @property
    def retryable(self) -> bool:
        return self.details["retryable"]


class LedgerImmutableError(AppException):
    """Raised on any attempt to update or delete a ledger entry."""

    def __init__(self, entry_id: Any = None, operation: str = "update"):
        super().__init__(
            message=f"Ledger entries are append-only; {operation} of entry {entry_id} refused",
            error_code="ERR_LEDGER_IMMUTABLE",
            status_code=HTTPStatus.CONFLICT,
            details={"entry_id": entry_id, "operation": operation}
        )
