"""
Entry point for ``python -m employee_hub.cli``.
"""

import sys

from employee_hub.cli.employees import main

if __name__ == "__main__":
    sys.exit(main())
