"""
Error taxonomy shared by every service. The API layer maps each class to its
HTTP status (see api.errors); services never build responses themselves.
"""
from __future__ import annotations

from enum import Enum


class ServiceError(Exception):
    status = 500
    error = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(ServiceError):
    status = 400
    error = "VALIDATION_ERROR"
    default_message = "Invalid input"


class AuthFailure(str, Enum):
    MISSING = "missing"
    INVALID = "invalid"
    UNKNOWN = "unknown"
    REVOKED = "revoked"
    EXPIRED = "expired"


class AuthError(ServiceError):
    status = 401
    error = "UNAUTHORIZED"
    default_message = "Invalid or expired token"

    def __init__(self, reason: AuthFailure, message: str | None = None):
        self.reason = reason
        super().__init__(message, details={"reason": reason.value})


class ForbiddenError(ServiceError):
    status = 403
    error = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(ServiceError):
    status = 404
    error = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(ServiceError):
    status = 409
    error = "CONFLICT"
    default_message = "Conflict"


class InternalError(ServiceError):
    pass
