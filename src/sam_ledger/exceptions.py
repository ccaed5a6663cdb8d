"""Domain-specific exceptions for the SAM ledger.

Recoverable per-row import problems are never raised; they are collected into
the import result. Only the conditions below abort an operation.
"""

from typing import Any


class SamLedgerError(Exception):
    """Base exception for all ledger errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors
# =============================================================================


class NotFoundError(SamLedgerError):
    """Base class for resource not found errors."""

    pass


class AllocationNotFoundError(NotFoundError):
    """Raised when a license allocation cannot be found."""

    def __init__(self, allocation_id: str | None = None) -> None:
        message = "Allocation not found"
        details = {"allocation_id": allocation_id} if allocation_id else {}
        super().__init__(message, details)


class RequestNotFoundError(NotFoundError):
    """Raised when a software request cannot be found."""

    def __init__(self, request_id: str | None = None) -> None:
        message = "Software request not found"
        details = {"request_id": request_id} if request_id else {}
        super().__init__(message, details)


# =============================================================================
# Conflict Errors
# =============================================================================


class ConflictError(SamLedgerError):
    """Base class for state conflict errors."""

    pass


class RequestAlreadyDecidedError(ConflictError):
    """Raised when approving or denying a request that is no longer pending."""

    def __init__(self, request_id: str | None = None, status: str | None = None) -> None:
        message = "Software request has already been decided"
        details: dict[str, Any] = {}
        if request_id:
            details["request_id"] = request_id
        if status:
            details["status"] = status
        super().__init__(message, details)


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(SamLedgerError):
    """Base class for validation errors."""

    pass


class ImportParseError(ValidationError):
    """Raised when an import file is structurally unusable.

    Aborts the whole import before any row is processed.
    """

    pass


class InvalidStatusError(ValidationError):
    """Raised when a value is not a known allocation status."""

    def __init__(self, status: str | None = None) -> None:
        message = "Invalid allocation status"
        details = {"status": status} if status else {}
        super().__init__(message, details)


# =============================================================================
# Integrity Errors
# =============================================================================


class IntegrityError(SamLedgerError):
    """Raised when a required reference between entities does not resolve.

    Indicates a programming error: pools cannot outlive their product and
    allocations cannot outlive their pool or person.
    """

    def __init__(self, entity: str, entity_id: str, reference: str, reference_id: str) -> None:
        message = f"{entity} {entity_id} references missing {reference} {reference_id}"
        details = {
            "entity": entity,
            "entity_id": entity_id,
            "reference": reference,
            "reference_id": reference_id,
        }
        super().__init__(message, details)
