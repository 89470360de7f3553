"""
FastAPI application for the employee records system.

This package contains the REST API for managing employee records and
their CSV/Excel import and export.
"""

__version__ = "1.0.0"
