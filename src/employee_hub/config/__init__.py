"""Configuration management for EmployeeHub.

Usage:
    >>> from employee_hub.config import get_settings
    >>> settings = get_settings()
    >>> settings.employee_api_url
    'http://localhost:8112/api/v1/employee'
"""

from employee_hub.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
