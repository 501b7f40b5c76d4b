"""Command-line interface for EmployeeHub."""
