"""Models package for the employee records system."""
from backend.models.schema import Base, Employee

__all__ = ['Base', 'Employee']
