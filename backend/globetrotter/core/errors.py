"""
Domain exceptions for the trip aggregate and access-control engine.

Services raise these; the API layer maps each ErrorCode to an HTTP status.
The core itself never deals in status codes.

Usage:
    from globetrotter.core.errors import NotFoundError

    raise NotFoundError("City")
"""
from enum import Enum


class ErrorCode(str, Enum):
    """Error kinds exposed to the transport layer."""

    NOT_FOUND = "NOT_FOUND"
    ACCESS_DENIED = "ACCESS_DENIED"
    CONFLICT = "CONFLICT"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_REORDER = "INVALID_REORDER"
    UNAVAILABLE = "UNAVAILABLE"


class GlobeTrotterError(Exception):
    """Base exception for all GlobeTrotter domain errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_ARGUMENT):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(GlobeTrotterError):
    """The targeted resource, or an ancestor needed for ownership, does not exist."""

    def __init__(self, resource: str, message: str = None):
        self.resource = resource
        super().__init__(message or f"{resource} not found", code=ErrorCode.NOT_FOUND)


class AccessDeniedError(GlobeTrotterError):
    """Actor is not the owner and the trip is not readable to them."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code=ErrorCode.ACCESS_DENIED)


class ConflictError(GlobeTrotterError):
    """A uniqueness invariant would be violated."""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.CONFLICT)


class InvalidArgumentError(GlobeTrotterError):
    """A business invariant not covered by storage constraints failed."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_ARGUMENT):
        super().__init__(message, code=code)


class InvalidReorderError(InvalidArgumentError):
    """Reorder list is not a permutation of the parent's children."""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.INVALID_REORDER)


class UnavailableError(GlobeTrotterError):
    """Storage or transaction failure. Safe to retry."""

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message, code=ErrorCode.UNAVAILABLE)
