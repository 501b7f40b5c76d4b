"""
Utility functions for the employee API connector.
"""

from urllib.parse import quote


def build_url(base_url: str, *segments: str) -> str:
    """
    Join the resource base URL with path segments.

    Segments are percent-encoded so an identifier can never alter the path.

    Examples:
        >>> build_url("http://localhost:8112/api/v1/employee/", "42")
        'http://localhost:8112/api/v1/employee/42'
        >>> build_url("http://localhost:8112/api/v1/employee")
        'http://localhost:8112/api/v1/employee'
    """
    url = base_url.rstrip("/")
    for segment in segments:
        url = f"{url}/{quote(str(segment).strip('/'), safe='')}"
    return url
