"""
CLI for the employee directory operations.

Usage:
    # List every employee
    python -m employee_hub.cli list

    # Fetch one employee
    python -m employee_hub.cli get 3fa85f64-5717-4562-b3fc-2c963f66afa6

    # Case-insensitive name search
    python -m employee_hub.cli search doe

    # Salary aggregates
    python -m employee_hub.cli highest-salary
    python -m employee_hub.cli top-earners

    # Create / delete
    python -m employee_hub.cli create --name "Jane Doe" --salary 90000 --age 31 --title Engineer
    python -m employee_hub.cli delete 3fa85f64-5717-4562-b3fc-2c963f66afa6

Results are printed as JSON on stdout. Failures are printed on stderr and
reflected in the exit code (see EXIT_CODES).
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from employee_hub.config.settings import get_settings
from employee_hub.domain.employees.errors import (
    EmployeeServiceError,
    ErrorKind,
    InvalidRequest,
    status_code_for,
)
from employee_hub.domain.employees.service import EmployeeDataService
from employee_hub.utils.logging import get_logger

logger = get_logger(__name__)

EXIT_CODES: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_IDENTIFIER: 2,
    ErrorKind.INVALID_REQUEST: 2,
    ErrorKind.NOT_FOUND: 3,
    ErrorKind.RATE_LIMITED: 4,
    ErrorKind.EXTERNAL_SERVICE_FAILURE: 5,
}


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    if hasattr(result, "model_dump"):
        return result.model_dump(mode="json")
    return result


def _error_payload(error: EmployeeServiceError) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "status": status_code_for(error),
        "error": error.kind.value,
        "message": error.message,
    }
    if isinstance(error, InvalidRequest) and error.validation_errors:
        payload["validation_errors"] = error.validation_errors
    return payload


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="employee_hub.cli",
        description="Employee directory operations against the remote employee service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Time budget in seconds for the whole command, retries included",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all employees")

    get_parser = subparsers.add_parser("get", help="Fetch one employee by id")
    get_parser.add_argument("employee_id", help="Employee UUID")

    search_parser = subparsers.add_parser("search", help="Search employees by name")
    search_parser.add_argument("term", help="Case-insensitive name fragment")

    subparsers.add_parser("highest-salary", help="Highest salary among employees")
    subparsers.add_parser("top-earners", help="Names of the ten highest earners")

    create_parser = subparsers.add_parser("create", help="Create an employee")
    create_parser.add_argument("--name", required=True)
    create_parser.add_argument("--salary", type=int, required=True)
    create_parser.add_argument("--age", type=int, required=True)
    create_parser.add_argument("--title", required=True)

    delete_parser = subparsers.add_parser("delete", help="Delete an employee by id")
    delete_parser.add_argument("employee_id", help="Employee UUID")

    return parser


def run_command(service: EmployeeDataService, args: argparse.Namespace) -> Any:
    """Dispatch parsed arguments to the matching service operation."""
    options = {"timeout": args.timeout}

    if args.command == "list":
        return service.list_all(**options)
    if args.command == "get":
        return service.get_by_id(args.employee_id, **options)
    if args.command == "search":
        return service.search_by_name(args.term, **options)
    if args.command == "highest-salary":
        return service.highest_salary(**options)
    if args.command == "top-earners":
        return service.top_ten_earners(**options)
    if args.command == "create":
        payload = {
            "name": args.name,
            "salary": args.salary,
            "age": args.age,
            "title": args.title,
        }
        return service.create(payload, **options)
    if args.command == "delete":
        return service.delete_by_id(args.employee_id, **options)

    raise ValueError(f"Unknown command: {args.command}")


def main(
    argv: Optional[List[str]] = None,
    service: Optional[EmployeeDataService] = None,
) -> int:
    """
    CLI entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
        service: Pre-built service; built from settings when omitted

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    owns_service = service is None
    if owns_service:
        try:
            service = EmployeeDataService.from_settings(get_settings())
        except Exception as e:
            print(f"Failed to load settings: {e}", file=sys.stderr)
            return 1

    try:
        result = run_command(service, args)
    except EmployeeServiceError as e:
        logger.warning("cli.command_failed", command=args.command, kind=e.kind.value)
        print(json.dumps(_error_payload(e), ensure_ascii=False), file=sys.stderr)
        return EXIT_CODES.get(e.kind, 1)
    finally:
        if owns_service:
            service.close()

    print(json.dumps(_to_jsonable(result), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
