"""
Employee API HTTP client core implementation.
"""

import logging
import time
from typing import List, Optional

from employee_hub.domain.employees.errors import ExternalServiceFailure
from employee_hub.domain.employees.models import (
    DeleteEmployeeRequest,
    Employee,
    EmployeeCreateRequest,
)

from .parsers import INVALID_RESPONSE_MESSAGE, parse_envelope
from .transport import EmployeeApiTransport
from .utils import build_url

logger = logging.getLogger(__name__)


class EmployeeApiClient(EmployeeApiTransport):
    """
    Synchronous HTTP client for the remote employee service.

    Every method issues a single request (delete_employee issues two, in
    order) and raises the employee error taxonomy; nothing is retried here.
    """

    def fetch_all(self, *, timeout: Optional[float] = None) -> List[Employee]:
        """
        Fetch the full employee collection.

        Returns:
            List of employees; empty when the service reports no data
        """
        logger.info("Fetching all employees from external service")

        response = self._make_request(
            "GET",
            self.base_url,
            failure_message="Failed to retrieve employees from external service",
            timeout=timeout,
        )
        envelope = parse_envelope(response, List[Employee])

        if envelope.data is None:
            logger.warning("External service returned null employee data")
            return []

        logger.info(
            "Retrieved employees from external service",
            extra={"count": len(envelope.data)},
        )
        return list(envelope.data)

    def fetch_one(
        self, employee_id: str, *, timeout: Optional[float] = None
    ) -> Employee:
        """
        Fetch one employee by id.

        Raises:
            NotFound: If the service answers 404
        """
        logger.info("Fetching employee", extra={"employee_id": employee_id})

        response = self._make_request(
            "GET",
            build_url(self.base_url, employee_id),
            failure_message="Failed to retrieve employee from external service",
            employee_id=employee_id,
            timeout=timeout,
        )
        envelope = parse_envelope(response, Employee)

        if envelope.data is None:
            logger.error(
                "External service returned null employee data",
                extra={"employee_id": employee_id},
            )
            raise ExternalServiceFailure(INVALID_RESPONSE_MESSAGE)

        return envelope.data

    def create(
        self, request: EmployeeCreateRequest, *, timeout: Optional[float] = None
    ) -> Employee:
        """Create an employee and return the record stored by the service."""
        logger.info("Creating employee", extra={"title": request.title})

        response = self._make_request(
            "POST",
            self.base_url,
            json=request.model_dump(),
            failure_message="Failed to create employee in external service",
            timeout=timeout,
        )
        envelope = parse_envelope(response, Employee)

        if envelope.data is None:
            logger.error("External service returned no created employee")
            raise ExternalServiceFailure("Failed to create employee")

        logger.info("Created employee", extra={"employee_id": envelope.data.id})
        return envelope.data

    def delete_by_name(self, name: str, *, timeout: Optional[float] = None) -> bool:
        """
        Delete an employee by name (the remote deletion API keys on name).

        Raises:
            ExternalServiceFailure: If the service does not confirm the deletion
        """
        response = self._make_request(
            "DELETE",
            self.base_url,
            json=DeleteEmployeeRequest(name=name).model_dump(),
            failure_message="Failed to delete employee from external service",
            timeout=timeout,
        )
        envelope = parse_envelope(response, bool)

        if not envelope.data:
            logger.error(
                "External service did not confirm deletion",
                extra={"data": envelope.data},
            )
            raise ExternalServiceFailure("Failed to delete employee")

        return True

    def delete_employee(
        self, employee_id: str, *, timeout: Optional[float] = None
    ) -> str:
        """
        Resolve an employee's current name, then delete by that name.

        Args:
            employee_id: Validated employee id
            timeout: Time budget in seconds shared by both requests

        Returns:
            The deleted employee's name
        """
        logger.info("Deleting employee", extra={"employee_id": employee_id})

        started = time.monotonic()
        employee = self.fetch_one(employee_id, timeout=timeout)
        if not employee.employee_name:
            logger.error(
                "Employee has no name to delete by",
                extra={"employee_id": employee_id},
            )
            raise ExternalServiceFailure("Failed to delete employee")

        remaining = None
        if timeout is not None:
            remaining = timeout - (time.monotonic() - started)
            if remaining <= 0:
                logger.error(
                    "Time budget spent before delete request",
                    extra={"employee_id": employee_id, "timeout": timeout},
                )
                raise ExternalServiceFailure(
                    "Failed to delete employee from external service"
                )

        self.delete_by_name(employee.employee_name, timeout=remaining)

        logger.info("Deleted employee", extra={"employee_id": employee_id})
        return employee.employee_name
