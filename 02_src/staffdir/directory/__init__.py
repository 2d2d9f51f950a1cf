"""Employee directory module."""

from .service import EmployeeDirectory, IEmployeeDirectory, is_valid_employee_id

__all__ = ["EmployeeDirectory", "IEmployeeDirectory", "is_valid_employee_id"]
