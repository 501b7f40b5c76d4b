"""
Local validation performed before any request reaches the remote service.

Both checks are pure: an invalid identifier or request body is rejected here
and never costs a network call (or a slot in the remote rate limit).
"""

import re
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from employee_hub.utils.logging import get_logger

from .errors import InvalidIdentifier, InvalidRequest
from .models import EmployeeCreateRequest

logger = get_logger(__name__)

# Canonical 8-4-4-4-12 hyphenated form only; uuid.UUID() alone would also
# accept braces, "urn:uuid:" prefixes and unhyphenated hex.
_UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def validate_employee_id(employee_id: Optional[str]) -> str:
    """
    Validate an employee identifier.

    Args:
        employee_id: Identifier supplied by the caller

    Returns:
        The identifier with surrounding whitespace removed

    Raises:
        InvalidIdentifier: If the id is missing, blank or not a canonical UUID

    Examples:
        >>> validate_employee_id("3fa85f64-5717-4562-b3fc-2c963f66afa6")
        '3fa85f64-5717-4562-b3fc-2c963f66afa6'
    """
    if employee_id is None or not str(employee_id).strip():
        logger.warning("employee_id.blank")
        raise InvalidIdentifier(
            "Employee ID cannot be null or empty", employee_id=employee_id
        )

    cleaned = str(employee_id).strip()
    if not _UUID_PATTERN.match(cleaned):
        logger.warning("employee_id.invalid_format", employee_id=cleaned)
        raise InvalidIdentifier(
            "Invalid employee ID format. Expected a valid UUID.",
            employee_id=cleaned,
        )
    return cleaned


def _format_errors(exc: ValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        messages.append(f"{field}: {error.get('msg', 'invalid value')}")
    return messages


def validate_create_request(
    payload: Union[EmployeeCreateRequest, Mapping[str, Any], None],
) -> EmployeeCreateRequest:
    """
    Validate a pre-parsed create body.

    Args:
        payload: Mapping decoded from the inbound request, or a request model

    Returns:
        A validated EmployeeCreateRequest

    Raises:
        InvalidRequest: With one ``"<field>: <message>"`` entry per violation
    """
    if payload is None:
        raise InvalidRequest("Validation failed", ["body: Request body is required"])

    if isinstance(payload, EmployeeCreateRequest):
        payload = payload.model_dump()

    if not isinstance(payload, Mapping):
        raise InvalidRequest(
            "Validation failed", ["body: Request body must be a JSON object"]
        )

    try:
        return EmployeeCreateRequest.model_validate(dict(payload))
    except ValidationError as e:
        errors = _format_errors(e)
        logger.warning("create_request.invalid", validation_errors=errors)
        raise InvalidRequest("Validation failed", errors) from e
