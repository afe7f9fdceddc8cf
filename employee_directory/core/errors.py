from typing import Dict, List, Optional, Type

from fastapi import status


class EmployeeDirectoryError(Exception):
    """Base class for every error the service maps to an HTTP response."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": self.message}


class ValidationError(EmployeeDirectoryError):
    """Input failed one or more field rules; ``details`` lists all of them."""

    def __init__(self, details: List[str]) -> None:
        super().__init__("Validation failed")
        self.details = details

    def to_response(self) -> dict:
        return {"error": self.message, "details": self.details}


class NotFoundError(EmployeeDirectoryError):
    def __init__(self, message: str = "Employee not found") -> None:
        super().__init__(message)


class ConflictError(EmployeeDirectoryError):
    pass


class StoreError(EmployeeDirectoryError):
    """Unexpected storage failure. ``cause`` is only exposed in development."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConstraintViolation(StoreError):
    """A write collided with the primary key or the unique email."""


ERROR_STATUS_CODES: Dict[Type[EmployeeDirectoryError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: EmployeeDirectoryError) -> int:
    for klass in type(exc).__mro__:
        if klass in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[klass]
    return status.HTTP_500_INTERNAL_SERVER_ERROR
