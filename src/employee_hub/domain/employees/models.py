"""
Pydantic v2 data models for the employee directory domain.

This module defines the data contracts exchanged with the remote
employee-record service:
1. Employee records as returned by the service (read-only once received)
2. Employee creation and deletion request bodies
3. The generic response envelope wrapping every remote payload

Field names mirror the remote service's JSON contract (``employee_name``,
``employee_salary``, ...). Name and salary are optional on purpose: a record
with missing values is still a valid record and is only excluded from the
name/salary based aggregations.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

MIN_EMPLOYEE_AGE = 16
MAX_EMPLOYEE_AGE = 75

T = TypeVar("T")


class Employee(BaseModel):
    """Employee record owned by the remote service, kept exactly as received."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    id: str = Field(..., min_length=1, description="UUID assigned by the remote service")
    employee_name: Optional[str] = Field(default=None, description="Full name")
    employee_salary: Optional[int] = Field(default=None, description="Annual salary")
    employee_age: Optional[int] = Field(default=None, description="Age in years")
    employee_title: Optional[str] = Field(default=None, description="Job title")
    employee_email: Optional[str] = Field(
        default=None, description="Email address assigned by the remote service"
    )


class EmployeeCreateRequest(BaseModel):
    """
    Request body for creating an employee.

    All fields are required; ``validate_default`` makes missing values go
    through the field validators so every violation is reported with a
    readable message instead of pydantic's generic "Field required".
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_default=True,
        extra="ignore",
    )

    name: Optional[str] = Field(default=None, description="Employee full name")
    salary: Optional[int] = Field(default=None, description="Salary, must be > 0")
    age: Optional[int] = Field(
        default=None,
        description=f"Age, between {MIN_EMPLOYEE_AGE} and {MAX_EMPLOYEE_AGE} inclusive",
    )
    title: Optional[str] = Field(default=None, description="Job title")

    @field_validator("name", "title")
    @classmethod
    def not_blank(cls, v: Optional[str], info: ValidationInfo) -> str:
        if v is None or not v.strip():
            raise PydanticCustomError(
                "blank",
                "Employee {field} cannot be blank",
                {"field": info.field_name},
            )
        return v

    @field_validator("salary")
    @classmethod
    def positive_salary(cls, v: Optional[int]) -> int:
        if v is None:
            raise PydanticCustomError("null", "Employee salary cannot be null")
        if v < 1:
            raise PydanticCustomError(
                "too_small", "Employee salary must be greater than zero"
            )
        return v

    @field_validator("age")
    @classmethod
    def age_in_range(cls, v: Optional[int]) -> int:
        if v is None:
            raise PydanticCustomError("null", "Employee age cannot be null")
        if v < MIN_EMPLOYEE_AGE:
            raise PydanticCustomError(
                "too_small",
                "Employee age must be at least {minimum}",
                {"minimum": MIN_EMPLOYEE_AGE},
            )
        if v > MAX_EMPLOYEE_AGE:
            raise PydanticCustomError(
                "too_large",
                "Employee age must be at most {maximum}",
                {"maximum": MAX_EMPLOYEE_AGE},
            )
        return v


class DeleteEmployeeRequest(BaseModel):
    """Body of the remote DELETE call, which keys on the employee name."""

    name: str


class Envelope(BaseModel, Generic[T]):
    """Outer wrapper of every remote response: a status tag and the payload."""

    model_config = ConfigDict(extra="ignore")

    data: Optional[T] = None
    status: Optional[str] = None
