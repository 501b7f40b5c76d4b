"""
HTTP Transport layer for the employee API connector.
Handles session management, headers, timeouts and response classification.

Retrying is deliberately not done here: a 429 is classified as RateLimited
and left to the retry controller wrapping the calling operation.
"""

import logging
from typing import Optional

import requests

from employee_hub.config.settings import get_settings
from employee_hub.domain.employees.errors import (
    ExternalServiceFailure,
    NotFound,
    RateLimited,
)

logger = logging.getLogger(__name__)


class EmployeeApiTransport:
    """
    Base HTTP transport for the remote employee service.
    Owns the requests session and maps HTTP outcomes onto the error taxonomy.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: Employee resource URL. If None, uses settings
                (domain joined with base path)
            timeout: Request timeout in seconds. If None, uses settings default
            session: Pre-built requests session (tests, connection sharing)
        """
        self.settings = get_settings()

        self.base_url = (
            base_url if base_url is not None else self.settings.employee_api_url
        ).rstrip("/")
        self.timeout = (
            timeout if timeout is not None else self.settings.employee_api_timeout
        )

        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": "EmployeeHub API Client",
                "Accept": "application/json",
                "Content-Type": "application/json; charset=utf-8",
            }
        )

        logger.info(
            "Employee API transport initialized",
            extra={"base_url": self.base_url, "timeout": self.timeout},
        )

    def close(self) -> None:
        """Release pooled connections held by the session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _request_timeout(self, timeout: Optional[float]) -> float:
        if timeout is None:
            return self.timeout
        return min(self.timeout, timeout)

    def _make_request(
        self,
        method: str,
        url: str,
        *,
        failure_message: str,
        employee_id: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs,
    ) -> requests.Response:
        """
        Make one HTTP request and classify the outcome.

        Args:
            method: HTTP method (GET, POST, DELETE)
            url: Request URL
            failure_message: Message for ExternalServiceFailure on this call
            employee_id: Set for single-employee lookups; turns a 404 into
                NotFound instead of a generic failure
            timeout: Caller time budget in seconds; the request waits at most
                the smaller of this and the configured per-request timeout
            **kwargs: Additional arguments for requests

        Returns:
            Response object for 2xx responses

        Raises:
            RateLimited: For 429 responses
            NotFound: For 404 responses on single-employee lookups
            ExternalServiceFailure: For other HTTP errors or request failures
        """
        logger.debug(
            "Making employee API request",
            extra={"method": method, "url": url, "employee_id": employee_id},
        )

        try:
            response = self.session.request(
                method, url, timeout=self._request_timeout(timeout), **kwargs
            )
        except requests.RequestException as e:
            logger.error(
                "Failed to communicate with employee service",
                extra={"method": method, "url": url, "error": str(e)},
            )
            raise ExternalServiceFailure(failure_message, cause=e) from e

        status_code = response.status_code

        if 200 <= status_code < 300:
            logger.debug(
                "Employee API request successful",
                extra={"url": url, "status_code": status_code},
            )
            return response

        if status_code == 429:
            logger.info(
                "Employee service rate limit exceeded",
                extra={"method": method, "url": url, "status_code": status_code},
            )
            raise RateLimited()

        http_error = requests.HTTPError(
            f"{status_code} error from employee service for url: {url}",
            response=response,
        )

        if status_code == 404 and employee_id is not None:
            logger.warning(
                "Employee not found",
                extra={"employee_id": employee_id, "status_code": status_code},
            )
            raise NotFound(employee_id, cause=http_error) from http_error

        logger.error(
            "Unexpected employee API response",
            extra={"method": method, "url": url, "status_code": status_code},
        )
        raise ExternalServiceFailure(
            failure_message, status_code=status_code, cause=http_error
        ) from http_error
