"""Capability the employee service facade needs from a remote client."""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from .models import Employee, EmployeeCreateRequest


@runtime_checkable
class EmployeeDirectoryClient(Protocol):
    """
    Remote employee directory.

    Implementations raise the errors from ``employee_hub.domain.employees.errors``;
    a throttled call must raise an error whose ``kind`` is RATE_LIMITED.
    ``timeout`` is the caller's remaining time budget in seconds (None for no
    caller deadline); no request may wait longer than it.
    """

    def fetch_all(self, *, timeout: Optional[float] = None) -> List[Employee]:
        """Return the whole collection (empty when the service reports none)."""
        ...

    def fetch_one(
        self, employee_id: str, *, timeout: Optional[float] = None
    ) -> Employee:
        """Return one employee or raise NotFound."""
        ...

    def create(
        self, request: EmployeeCreateRequest, *, timeout: Optional[float] = None
    ) -> Employee:
        """Create an employee and return the stored record."""
        ...

    def delete_employee(
        self, employee_id: str, *, timeout: Optional[float] = None
    ) -> str:
        """Delete an employee by id and return the deleted employee's name."""
        ...
