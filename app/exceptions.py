"""
Typed failures raised by the service layer.

The HTTP layer maps each class to a status code and an error code in
``app.main``; services never raise ``HTTPException`` themselves.
"""
from typing import Any, Optional
from fastapi import status


class ServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "SERVER_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class CycleViolationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "CYCLE_VIOLATION"


class ValidationFailedError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class UnauthorizedError(ServiceError):
    """Caller is neither the owner of the resource nor an administrator"""
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class AuthenticationError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHENTICATED"


class StorageFailureError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "STORAGE_FAILURE"
