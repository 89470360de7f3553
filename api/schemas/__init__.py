"""
Pydantic schemas for request/response validation.

This package contains all Pydantic models used for API request validation
and response serialization.
"""

from api.schemas.common import (
    ErrorResponse, PaginatedResponse, SuccessResponse, HealthCheckResponse
)
from api.schemas.employee_schema import (
    EmployeeCreateRequest, EmployeeUpdateRequest, EmployeeResponse, EmployeeListResponse
)
from api.schemas.import_schema import ImportResultResponse

__all__ = [
    # Common
    'ErrorResponse',
    'PaginatedResponse',
    'SuccessResponse',
    'HealthCheckResponse',

    # Employee
    'EmployeeCreateRequest',
    'EmployeeUpdateRequest',
    'EmployeeResponse',
    'EmployeeListResponse',

    # Import
    'ImportResultResponse',
]
