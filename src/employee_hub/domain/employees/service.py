"""
Employee data service: the single public entry point of the data-access layer.

Each operation validates its input locally, runs the remote call(s) under the
shared retry controller and, where needed, computes the derived view over the
fetched collection. Failures propagate unchanged as EmployeeServiceError
subclasses; mapping them onto HTTP statuses is left to the caller
(see ``errors.status_code_for``).
"""

import threading
from typing import Any, Callable, List, Mapping, Optional, TypeVar, Union

from employee_hub.infrastructure.resilience.retry import RetryController, RetryPolicy
from employee_hub.utils.logging import get_logger

from . import aggregation
from .models import Employee, EmployeeCreateRequest
from .protocols import EmployeeDirectoryClient
from .validation import validate_create_request, validate_employee_id

logger = get_logger(__name__)

T = TypeVar("T")


class EmployeeDataService:
    """
    Facade composing validation, retry and aggregation over a remote client.

    The client and retry controller are injected so tests can substitute a
    deterministic stub and a zero-delay policy. The service keeps no state
    between calls and is safe to share between concurrent callers.

    Every network-touching method accepts keyword-only ``timeout`` (a time
    budget in seconds bounding both the backoff and each in-flight request)
    and ``cancel_event`` (a ``threading.Event`` that interrupts a pending
    backoff).
    """

    def __init__(
        self,
        client: EmployeeDirectoryClient,
        retry: Union[RetryController, RetryPolicy, None] = None,
    ):
        self.client = client
        if isinstance(retry, RetryPolicy):
            retry = RetryController(retry)
        self.retry = retry or RetryController()

    @classmethod
    def from_settings(cls, settings=None) -> "EmployeeDataService":
        """Wire the service against the HTTP client configured in settings."""
        from employee_hub.config.settings import get_settings
        from employee_hub.io.connectors.employee_api import EmployeeApiClient

        settings = settings or get_settings()
        client = EmployeeApiClient(
            base_url=settings.employee_api_url,
            timeout=settings.employee_api_timeout,
        )
        return cls(client, RetryPolicy.from_settings(settings))

    def close(self) -> None:
        """Release the client's connections, if it holds any."""
        close = getattr(self.client, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "EmployeeDataService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _call(
        self,
        operation: Callable[[Optional[float]], T],
        name: str,
        timeout: Optional[float],
        cancel_event: Optional[threading.Event],
    ) -> T:
        return self.retry.run_with_budget(
            operation,
            operation_name=name,
            timeout=timeout,
            cancel_event=cancel_event,
        )

    def list_all(
        self,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Employee]:
        employees = self._call(
            lambda budget: self.client.fetch_all(timeout=budget),
            "list_all",
            timeout,
            cancel_event,
        )
        logger.info("employee_service.list_all", count=len(employees))
        return employees

    def get_by_id(
        self,
        employee_id: Optional[str],
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Employee:
        """
        Fetch one employee.

        Raises:
            InvalidIdentifier: Before any network call, for a malformed id
            NotFound: If the remote service has no such employee
        """
        cleaned_id = validate_employee_id(employee_id)
        employee = self._call(
            lambda budget: self.client.fetch_one(cleaned_id, timeout=budget),
            "get_by_id",
            timeout,
            cancel_event,
        )
        logger.info("employee_service.get_by_id", employee_id=cleaned_id)
        return employee

    def search_by_name(
        self,
        term: Optional[str],
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Employee]:
        employees = self._call(
            lambda budget: self.client.fetch_all(timeout=budget),
            "search_by_name",
            timeout,
            cancel_event,
        )
        matches = aggregation.search_by_name(employees, term)
        logger.info(
            "employee_service.search_by_name",
            term=term,
            scanned=len(employees),
            matched=len(matches),
        )
        return matches

    def highest_salary(
        self,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> int:
        employees = self._call(
            lambda budget: self.client.fetch_all(timeout=budget),
            "highest_salary",
            timeout,
            cancel_event,
        )
        if not employees:
            logger.warning("employee_service.highest_salary.no_employees")
        result = aggregation.highest_salary(employees)
        logger.info("employee_service.highest_salary", highest_salary=result)
        return result

    def top_ten_earners(
        self,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[Optional[str]]:
        employees = self._call(
            lambda budget: self.client.fetch_all(timeout=budget),
            "top_ten_earners",
            timeout,
            cancel_event,
        )
        names = aggregation.top_n(employees, aggregation.DEFAULT_TOP_N)
        logger.info("employee_service.top_ten_earners", count=len(names))
        return names

    def create(
        self,
        payload: Union[EmployeeCreateRequest, Mapping[str, Any], None],
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Employee:
        """
        Validate a create body and create the employee remotely.

        Only a 429 is retried: the remote service rejected the request
        before processing it, so resending cannot create a duplicate.

        Raises:
            InvalidRequest: Before any network call, for an invalid body
        """
        request = validate_create_request(payload)
        created = self._call(
            lambda budget: self.client.create(request, timeout=budget),
            "create",
            timeout,
            cancel_event,
        )
        logger.info("employee_service.create", employee_id=created.id)
        return created

    def delete_by_id(
        self,
        employee_id: Optional[str],
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> str:
        """
        Delete an employee by id and return the deleted employee's name.

        Resolving the name and deleting by name run in sequence as one
        retried unit, so a throttled delete re-resolves the current name.
        """
        cleaned_id = validate_employee_id(employee_id)
        name = self._call(
            lambda budget: self.client.delete_employee(cleaned_id, timeout=budget),
            "delete_by_id",
            timeout,
            cancel_event,
        )
        logger.info("employee_service.delete_by_id", employee_id=cleaned_id)
        return name
