"""Pytest configuration and shared fixtures.

An optional .ehub_env file at the project root is loaded FIRST with
override=True, so a developer can point tests at a local employee service
configuration without touching their shell environment.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

_EHUB_ENV_FILE = Path(__file__).parent.parent / ".ehub_env"
if _EHUB_ENV_FILE.exists():
    load_dotenv(_EHUB_ENV_FILE, override=True)

import json
from typing import Any, Callable, Iterator, List, Optional

import pytest
import requests

from employee_hub.config.settings import get_settings
from employee_hub.domain.employees.models import Employee
from employee_hub.infrastructure.resilience.retry import RetryController, RetryPolicy

BASE_URL = "http://test-domain.com/api/v1/employee"
JANE_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    """Every test sees settings built from its own (monkeypatched) environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def employees() -> List[Employee]:
    return [
        Employee(
            id=JANE_ID,
            employee_name="Jane Doe",
            employee_salary=120000,
            employee_age=34,
            employee_title="Engineer",
            employee_email="jane@company.com",
        ),
        Employee(
            id="8b1f2c3d-4e5f-4a6b-8c7d-9e0f1a2b3c4d",
            employee_name="John Smith",
            employee_salary=85000,
            employee_age=45,
            employee_title="Accountant",
        ),
        Employee(
            id="c0ffee00-1234-4abc-9def-0123456789ab",
            employee_name="Johnny Walker",
            employee_salary=None,
            employee_age=29,
            employee_title="Intern",
        ),
        Employee(
            id="deadbeef-0000-4000-8000-000000000001",
            employee_name=None,
            employee_salary=150000,
            employee_age=50,
            employee_title="Director",
        ),
    ]


@pytest.fixture
def zero_delay_policy() -> RetryPolicy:
    return RetryPolicy(max_attempts=3, initial_delay=0.0, multiplier=2.0)


@pytest.fixture
def recorded_sleeps() -> List[float]:
    return []


@pytest.fixture
def retry_controller(recorded_sleeps: List[float]) -> Callable[..., RetryController]:
    """Factory for retry controllers that record instead of sleeping."""

    def _build(**policy_kwargs: Any) -> RetryController:
        policy_kwargs.setdefault("initial_delay", 0.5)
        return RetryController(
            RetryPolicy(**policy_kwargs), sleep=recorded_sleeps.append
        )

    return _build


def _make_response(
    status_code: int = 200,
    payload: Optional[Any] = None,
    *,
    body: Optional[bytes] = None,
    url: str = BASE_URL,
) -> requests.Response:
    """Build a real requests.Response without network access."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if body is not None:
        response._content = body
    elif payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
    else:
        response._content = b""
    return response


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return _make_response


@pytest.fixture
def jane_id() -> str:
    return JANE_ID
