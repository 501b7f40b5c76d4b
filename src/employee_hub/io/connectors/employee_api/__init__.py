"""
Employee API connector package.
"""

from .core import EmployeeApiClient
from .transport import EmployeeApiTransport

__all__ = [
    "EmployeeApiClient",
    "EmployeeApiTransport",
]
