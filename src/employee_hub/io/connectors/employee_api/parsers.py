"""
Response parsing logic for the employee API connector.
"""

import logging
from typing import Any, Dict, Type

import requests
from pydantic import ValidationError

from employee_hub.domain.employees.errors import ExternalServiceFailure
from employee_hub.domain.employees.models import Envelope

logger = logging.getLogger(__name__)

INVALID_RESPONSE_MESSAGE = "Invalid response from external service"


def decode_json_body(response: requests.Response) -> Dict[str, Any]:
    """
    Decode a response body into the envelope's JSON object.

    Raises:
        ExternalServiceFailure: If the body is missing, not JSON, or not an object
    """
    if not response.content:
        logger.error(
            "Received empty response body from employee service",
            extra={"status_code": response.status_code},
        )
        raise ExternalServiceFailure(
            INVALID_RESPONSE_MESSAGE, status_code=response.status_code
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error(
            "Failed to decode employee service response",
            extra={"status_code": response.status_code, "error": str(e)},
        )
        raise ExternalServiceFailure(
            INVALID_RESPONSE_MESSAGE, status_code=response.status_code, cause=e
        ) from e

    if not isinstance(data, dict):
        logger.error(
            "Unexpected employee service response structure",
            extra={"payload_type": type(data).__name__},
        )
        raise ExternalServiceFailure(
            INVALID_RESPONSE_MESSAGE, status_code=response.status_code
        )

    return data


def parse_envelope(response: requests.Response, payload_type: Type[Any]) -> Envelope:
    """
    Parse a response into ``Envelope[payload_type]``.

    Args:
        response: Successful (2xx) HTTP response
        payload_type: Expected type of ``data``, e.g. ``List[Employee]``

    Returns:
        The validated envelope; ``data`` may be None

    Raises:
        ExternalServiceFailure: If the body or payload does not match the contract
    """
    data = decode_json_body(response)
    try:
        envelope = Envelope[payload_type].model_validate(data)
    except ValidationError as e:
        logger.error(
            "Employee service payload failed validation",
            extra={"error_count": e.error_count()},
        )
        raise ExternalServiceFailure(
            INVALID_RESPONSE_MESSAGE, status_code=response.status_code, cause=e
        ) from e

    logger.debug(
        "Parsed employee service envelope",
        extra={"status": envelope.status, "has_data": envelope.data is not None},
    )
    return envelope
