"""
Derived views over an already-fetched employee collection.

The remote service only returns the full collection, so search, maximum
salary and top earners are computed locally. All functions are pure and
skip records whose name or salary is missing rather than failing on them.
"""

from typing import Iterable, List, Optional, Sequence

from .models import Employee

DEFAULT_TOP_N = 10


def search_by_name(employees: Iterable[Employee], term: Optional[str]) -> List[Employee]:
    """
    Case-insensitive substring search on employee names.

    Args:
        employees: Employee collection
        term: Fragment to look for; a blank term matches every named employee

    Returns:
        Matching employees in input order; records without a name never match

    Examples:
        >>> staff = [Employee(id="1", employee_name="Jane Doe"), Employee(id="2")]
        >>> [e.id for e in search_by_name(staff, "JANE")]
        ['1']
    """
    needle = (term or "").casefold()
    return [
        employee
        for employee in employees
        if employee.employee_name is not None
        and needle in employee.employee_name.casefold()
    ]


def highest_salary(employees: Iterable[Employee]) -> int:
    """Return the maximum present salary, or 0 when there is none."""
    return max(
        (e.employee_salary for e in employees if e.employee_salary is not None),
        default=0,
    )


def top_n(employees: Sequence[Employee], n: int = DEFAULT_TOP_N) -> List[Optional[str]]:
    """
    Names of the ``n`` highest earners, highest first.

    Employees without a salary are dropped. Equal salaries keep their input
    order (``sorted`` is stable). Fewer than ``n`` eligible employees yields
    a shorter list.
    """
    if n <= 0:
        return []
    earners = [e for e in employees if e.employee_salary is not None]
    ranked = sorted(earners, key=lambda e: e.employee_salary, reverse=True)
    return [e.employee_name for e in ranked[:n]]
