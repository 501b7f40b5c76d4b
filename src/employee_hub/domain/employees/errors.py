"""
Error taxonomy for the employee data-access layer.

Every failure raised by the layer derives from EmployeeServiceError and carries
an ErrorKind tag. Callers (the retry controller, the CLI, an HTTP adapter)
branch on ``error.kind`` instead of on concrete exception classes, so nothing
above the connector depends on the HTTP library's exception hierarchy.
"""

from enum import Enum
from typing import Dict, List, Optional


class ErrorKind(str, Enum):
    """Stable classification of employee-layer failures."""

    INVALID_IDENTIFIER = "invalid_identifier"
    INVALID_REQUEST = "invalid_request"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    EXTERNAL_SERVICE_FAILURE = "external_service_failure"


class EmployeeServiceError(Exception):
    """Base exception for the employee data-access layer."""

    kind: ErrorKind = ErrorKind.EXTERNAL_SERVICE_FAILURE

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    @property
    def retryable(self) -> bool:
        return self.kind is ErrorKind.RATE_LIMITED


class InvalidIdentifier(EmployeeServiceError):
    """Raised when an employee id is blank or not a canonical UUID."""

    kind = ErrorKind.INVALID_IDENTIFIER

    def __init__(self, message: str, *, employee_id: Optional[str] = None, cause=None):
        super().__init__(message, cause=cause)
        self.employee_id = employee_id


class InvalidRequest(EmployeeServiceError):
    """Raised when a create payload fails field validation."""

    kind = ErrorKind.INVALID_REQUEST

    def __init__(self, message: str, validation_errors: Optional[List[str]] = None):
        super().__init__(message)
        self.validation_errors = list(validation_errors or [])


class NotFound(EmployeeServiceError):
    """Raised when the remote service reports no employee for an id (404)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, employee_id: str, *, cause: Optional[BaseException] = None):
        super().__init__(f"Employee not found with id: {employee_id}", cause=cause)
        self.employee_id = employee_id


class RateLimited(EmployeeServiceError):
    """Raised when the remote service throttles a request (429)."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str = "Too many requests to external service",
        *,
        attempts: int = 1,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.attempts = attempts


class ExternalServiceFailure(EmployeeServiceError):
    """Raised for any other remote or transport-level failure."""

    kind = ErrorKind.EXTERNAL_SERVICE_FAILURE

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.status_code = status_code


# HTTP status an inbound transport should answer with for each error kind.
ERROR_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_IDENTIFIER: 400,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.EXTERNAL_SERVICE_FAILURE: 503,
}


def status_code_for(error: EmployeeServiceError) -> int:
    """Return the HTTP status matching an error's kind (500 if unknown)."""
    return ERROR_STATUS_CODES.get(error.kind, 500)
