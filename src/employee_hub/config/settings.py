"""
Configuration management for EmployeeHub.

This module provides environment-based configuration using Pydantic BaseSettings,
so the remote endpoint, timeouts and retry policy can be changed per deployment
without code changes.

Environment variables are loaded with the EHUB_ prefix (for example
EHUB_EMPLOYEE_API_DOMAIN). LOG_LEVEL and ENVIRONMENT are read without prefix.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("EHUB_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Remote service:
    - EHUB_EMPLOYEE_API_DOMAIN: scheme + host (+ port) of the employee service
    - EHUB_EMPLOYEE_API_BASE_PATH: fixed path segment of the employee resource
    - EHUB_EMPLOYEE_API_TIMEOUT: per-request timeout in seconds

    Retry policy (applied to every retry-eligible call):
    - EHUB_RETRY_MAX_ATTEMPTS, EHUB_RETRY_INITIAL_DELAY,
      EHUB_RETRY_MULTIPLIER, EHUB_RETRY_MAX_DELAY
    """

    ENVIRONMENT: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        validation_alias="ENVIRONMENT",
        description="Deployment environment",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    app_name: str = Field(default="EmployeeHub", description="Application name")

    # Remote employee service
    employee_api_domain: str = Field(
        default="http://localhost:8112",
        description="Employee service scheme, host and port",
    )
    employee_api_base_path: str = Field(
        default="/api/v1/employee",
        description="Path of the employee resource on the remote service",
    )
    employee_api_timeout: float = Field(
        default=10.0, gt=0, description="Employee service request timeout in seconds"
    )

    # Retry policy
    retry_max_attempts: int = Field(
        default=3, ge=1, description="Total attempts for a rate-limited call"
    )
    retry_initial_delay: float = Field(
        default=1.0, ge=0, description="Seconds before the first retry"
    )
    retry_multiplier: float = Field(
        default=2.0, ge=1.0, description="Backoff multiplier applied after each retry"
    )
    retry_max_delay: Optional[float] = Field(
        default=None, ge=0, description="Upper bound for a single backoff wait"
    )

    @property
    def employee_api_url(self) -> str:
        """Base URL of the employee resource (domain joined with base path)."""
        domain = self.employee_api_domain.rstrip("/")
        path = self.employee_api_base_path.strip("/")
        return f"{domain}/{path}" if path else domain

    @model_validator(mode="after")
    def validate_employee_api_domain(self) -> "Settings":
        """Require an absolute http(s) domain, and https in production.

        Raises:
            ValueError: If the domain has no http/https scheme, or if
                ENVIRONMENT is 'prod' and the domain is plain http
        """
        domain = self.employee_api_domain.strip()
        if not domain.startswith(("http://", "https://")):
            raise ValueError(
                "employee_api_domain must start with 'http://' or 'https://', "
                f"got: {domain[:30]}"
            )
        if self.ENVIRONMENT == "prod" and not domain.startswith("https://"):
            raise ValueError(
                "Production environment requires an https employee service domain"
            )
        self.employee_api_domain = domain
        return self

    model_config = SettingsConfigDict(
        env_prefix="EHUB_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application lifecycle.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
