"""
Tests for EmployeeDataService.

The remote client is a Mock specced on the client protocol, so each test
controls exactly what the remote service answers on every attempt.
"""

import threading
from unittest.mock import Mock, patch

import pytest

from employee_hub.domain.employees import (
    EmployeeDataService,
    EmployeeDirectoryClient,
)
from employee_hub.domain.employees.errors import (
    ErrorKind,
    ExternalServiceFailure,
    InvalidIdentifier,
    InvalidRequest,
    NotFound,
    RateLimited,
)
from employee_hub.domain.employees.models import Employee, EmployeeCreateRequest
from employee_hub.infrastructure.resilience.retry import RetryController, RetryPolicy

VALID_BODY = {"name": "Jane Doe", "salary": 90000, "age": 31, "title": "Engineer"}


@pytest.fixture
def client():
    return Mock(spec=EmployeeDirectoryClient)


@pytest.fixture
def service(client, zero_delay_policy):
    return EmployeeDataService(client, zero_delay_policy)


@pytest.mark.unit
class TestServiceConstruction:
    def test_policy_is_wrapped_in_controller(self, client, zero_delay_policy):
        service = EmployeeDataService(client, zero_delay_policy)
        assert isinstance(service.retry, RetryController)
        assert service.retry.policy is zero_delay_policy

    def test_default_controller(self, client):
        service = EmployeeDataService(client)
        assert service.retry.policy == RetryPolicy()

    def test_from_settings_wires_http_client(self, monkeypatch):
        monkeypatch.setenv("EHUB_EMPLOYEE_API_DOMAIN", "http://employees.internal:9000")
        monkeypatch.setenv("EHUB_RETRY_MAX_ATTEMPTS", "5")

        service = EmployeeDataService.from_settings()

        assert service.client.base_url == "http://employees.internal:9000/api/v1/employee"
        assert service.retry.policy.max_attempts == 5

    def test_stub_satisfies_protocol(self, client):
        assert isinstance(client, EmployeeDirectoryClient)


@pytest.mark.unit
class TestReadOperations:
    def test_list_all_returns_client_result(self, service, client, employees):
        client.fetch_all.return_value = employees
        assert service.list_all() == employees
        client.fetch_all.assert_called_once_with(timeout=None)

    def test_list_all_empty(self, service, client):
        client.fetch_all.return_value = []
        assert service.list_all() == []

    def test_get_by_id_fetches_cleaned_id(self, service, client, employees, jane_id):
        client.fetch_one.return_value = employees[0]

        assert service.get_by_id(f"  {jane_id} ") == employees[0]
        client.fetch_one.assert_called_once_with(jane_id, timeout=None)

    @pytest.mark.parametrize("employee_id", [None, "", "not-a-uuid"])
    def test_get_by_id_invalid_makes_no_call(self, service, client, employee_id):
        with pytest.raises(InvalidIdentifier):
            service.get_by_id(employee_id)
        client.fetch_one.assert_not_called()

    def test_get_by_id_not_found_is_not_retried(self, service, client, jane_id):
        client.fetch_one.side_effect = NotFound(jane_id)

        with pytest.raises(NotFound):
            service.get_by_id(jane_id)
        assert client.fetch_one.call_count == 1

    def test_search_by_name(self, service, client, employees):
        client.fetch_all.return_value = employees

        result = service.search_by_name("john")
        assert [e.employee_name for e in result] == ["John Smith", "Johnny Walker"]

    def test_highest_salary(self, service, client, employees):
        client.fetch_all.return_value = employees
        assert service.highest_salary() == 150000

    def test_highest_salary_empty_directory(self, service, client):
        client.fetch_all.return_value = []
        assert service.highest_salary() == 0

    def test_top_ten_earners(self, service, client, employees):
        client.fetch_all.return_value = employees
        assert service.top_ten_earners() == [None, "Jane Doe", "John Smith"]

    def test_top_ten_earners_caps_at_ten(self, service, client):
        client.fetch_all.return_value = [
            Employee(
                id=f"00000000-0000-4000-8000-{index:012d}",
                employee_name=f"Employee {index}",
                employee_salary=1000 * (index + 1),
            )
            for index in range(12)
        ]

        names = service.top_ten_earners()
        assert len(names) == 10
        assert names[0] == "Employee 11"


@pytest.mark.unit
class TestRetryBehaviour:
    def test_recovers_after_rate_limits(self, service, client, employees):
        client.fetch_all.side_effect = [RateLimited(), RateLimited(), employees]

        assert service.list_all() == employees
        assert client.fetch_all.call_count == 3

    def test_exhausts_after_max_attempts(self, client):
        service = EmployeeDataService(
            client, RetryPolicy(max_attempts=2, initial_delay=0.0)
        )
        client.fetch_all.side_effect = RateLimited()

        with pytest.raises(RateLimited) as exc_info:
            service.highest_salary()

        assert client.fetch_all.call_count == 2
        assert exc_info.value.attempts == 2
        assert exc_info.value.kind is ErrorKind.RATE_LIMITED

    def test_external_failure_is_not_retried(self, service, client):
        client.fetch_all.side_effect = ExternalServiceFailure("boom", status_code=500)

        with pytest.raises(ExternalServiceFailure):
            service.top_ten_earners()
        assert client.fetch_all.call_count == 1

    def test_backoff_uses_controller_sleep(self, client, employees, retry_controller, recorded_sleeps):
        service = EmployeeDataService(client, retry_controller(initial_delay=0.5))
        client.fetch_all.side_effect = [RateLimited(), RateLimited(), employees]

        service.search_by_name("jane")
        assert recorded_sleeps == [0.5, 1.0]

    def test_cancel_event_stops_retrying(self, client):
        service = EmployeeDataService(client, RetryPolicy(max_attempts=5, initial_delay=10.0))
        client.fetch_all.side_effect = RateLimited()
        cancel_event = threading.Event()
        cancel_event.set()

        with pytest.raises(RateLimited):
            service.list_all(cancel_event=cancel_event)
        assert client.fetch_all.call_count == 1

    def test_timeout_stops_retrying(self, client):
        service = EmployeeDataService(client, RetryPolicy(max_attempts=5, initial_delay=10.0))
        client.fetch_all.side_effect = RateLimited()

        with pytest.raises(RateLimited):
            service.list_all(timeout=1.0)
        assert client.fetch_all.call_count == 1

    def test_operations_share_one_controller(self, service, client, employees, jane_id):
        client.fetch_all.return_value = employees
        client.fetch_one.return_value = employees[0]

        with patch.object(
            service.retry, "run_with_budget", wraps=service.retry.run_with_budget
        ) as mock_run:
            service.list_all()
            service.get_by_id(jane_id)
            service.highest_salary()

        names = [call.kwargs["operation_name"] for call in mock_run.call_args_list]
        assert names == ["list_all", "get_by_id", "highest_salary"]

    def test_timeout_bounds_each_client_call(self, service, client, employees, jane_id):
        client.fetch_all.return_value = employees
        client.delete_employee.return_value = "Jane Doe"

        service.list_all(timeout=1.0)
        service.delete_by_id(jane_id, timeout=2.0)

        list_budget = client.fetch_all.call_args.kwargs["timeout"]
        delete_budget = client.delete_employee.call_args.kwargs["timeout"]
        assert 0 < list_budget <= 1.0
        assert 0 < delete_budget <= 2.0

    def test_retry_gets_the_remaining_budget(self, client, employees):
        service = EmployeeDataService(client, RetryPolicy(max_attempts=3, initial_delay=0.05))
        client.fetch_all.side_effect = [RateLimited(), employees]

        service.list_all(timeout=5.0)

        first, second = [call.kwargs["timeout"] for call in client.fetch_all.call_args_list]
        assert second < first <= 5.0

    @pytest.mark.parametrize("timeout", [0, -1.0])
    def test_non_positive_timeout_is_rejected(self, service, client, timeout):
        with pytest.raises(ValueError):
            service.list_all(timeout=timeout)
        client.fetch_all.assert_not_called()


@pytest.mark.unit
class TestCreate:
    def test_create_forwards_validated_request(self, service, client, employees):
        client.create.return_value = employees[0]

        assert service.create(VALID_BODY) == employees[0]
        (request,), _ = client.create.call_args
        assert isinstance(request, EmployeeCreateRequest)
        assert request.model_dump() == VALID_BODY

    def test_create_invalid_makes_no_call(self, service, client):
        with pytest.raises(InvalidRequest) as exc_info:
            service.create({**VALID_BODY, "age": 12})

        assert exc_info.value.validation_errors == ["age: Employee age must be at least 16"]
        client.create.assert_not_called()

    def test_create_retries_rate_limit(self, service, client, employees):
        client.create.side_effect = [RateLimited(), employees[0]]

        assert service.create(VALID_BODY) == employees[0]
        assert client.create.call_count == 2


@pytest.mark.unit
class TestDeleteById:
    def test_returns_deleted_name(self, service, client, jane_id):
        client.delete_employee.return_value = "Jane Doe"

        assert service.delete_by_id(jane_id) == "Jane Doe"
        client.delete_employee.assert_called_once_with(jane_id, timeout=None)

    def test_invalid_id_makes_no_call(self, service, client):
        with pytest.raises(InvalidIdentifier):
            service.delete_by_id("  ")
        client.delete_employee.assert_not_called()

    def test_not_found_propagates(self, service, client, jane_id):
        client.delete_employee.side_effect = NotFound(jane_id)

        with pytest.raises(NotFound) as exc_info:
            service.delete_by_id(jane_id)
        assert exc_info.value.employee_id == jane_id

    def test_rate_limited_delete_is_retried_as_one_unit(self, service, client, jane_id):
        client.delete_employee.side_effect = [RateLimited(), "Jane Doe"]

        assert service.delete_by_id(jane_id) == "Jane Doe"
        assert client.delete_employee.call_count == 2


@pytest.mark.unit
class TestClose:
    def test_close_releases_client(self, zero_delay_policy):
        client = Mock()
        with EmployeeDataService(client, zero_delay_policy) as service:
            assert service.client is client
        client.close.assert_called_once_with()

    def test_close_tolerates_clients_without_close(self, service):
        service.close()
