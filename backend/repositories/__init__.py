"""Repositories package for the employee records system."""
from backend.repositories.employee_repository import EmployeeRepository

__all__ = ['EmployeeRepository']
