"""
Employee directory domain: models, error taxonomy, validation, aggregation
and the EmployeeDataService facade.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .errors import (
    ERROR_STATUS_CODES,
    EmployeeServiceError,
    ErrorKind,
    ExternalServiceFailure,
    InvalidIdentifier,
    InvalidRequest,
    NotFound,
    RateLimited,
    status_code_for,
)
from .models import DeleteEmployeeRequest, Employee, EmployeeCreateRequest, Envelope
from .protocols import EmployeeDirectoryClient

__all__ = [
    "DeleteEmployeeRequest",
    "Employee",
    "EmployeeCreateRequest",
    "EmployeeDataService",
    "EmployeeDirectoryClient",
    "EmployeeServiceError",
    "Envelope",
    "ERROR_STATUS_CODES",
    "ErrorKind",
    "ExternalServiceFailure",
    "InvalidIdentifier",
    "InvalidRequest",
    "NotFound",
    "RateLimited",
    "status_code_for",
]

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .service import EmployeeDataService


def __getattr__(name: str) -> Any:
    # The service imports the retry controller, which imports this package's
    # errors; loading it lazily keeps that import order acyclic.
    if name == "EmployeeDataService":
        from .service import EmployeeDataService

        return EmployeeDataService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
