"""
Employees router - CRUD and paged listing of employee records.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query

from api.config import settings
from api.dependencies import get_employee_service, get_current_user
from api.schemas.common import SuccessResponse
from api.schemas.employee_schema import (
    EmployeeCreateRequest, EmployeeUpdateRequest, EmployeeResponse, EmployeeListResponse
)
from services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix='/employees', tags=['employees'])


@router.get('', response_model=EmployeeListResponse)
async def list_employees(
    search: Optional[str] = Query(None, description="Case-insensitive search across all fields"),
    sort_column: Optional[str] = Query('surname', description="Field to sort by (e.g. surname, startDate)"),
    sort_direction: Optional[str] = Query('asc', description="'asc' or 'desc'"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE,
                           description="Items per page"),
    service: EmployeeService = Depends(get_employee_service)
):
    """
    List employees with search, sorting and pagination.

    **Query Parameters:**
    - `search`: Matched against every text field and both dates
    - `sort_column`: Unknown columns fall back to surname (ascending)
    - `sort_direction`: `desc` for descending, anything else ascending
    - `page`, `page_size`: 1-based paging

    **Example:**
    ```bash
    curl "http://localhost:8000/api/employees?search=doe&sort_column=startDate&sort_direction=desc"
    ```
    """
    result = service.get_paged(search, sort_column, sort_direction, page, page_size)
    return EmployeeListResponse.from_paged_result(result)


@router.get('/{employee_id}', response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service)
):
    """
    Get a single employee.

    **Example:**
    ```bash
    curl http://localhost:8000/api/employees/123
    ```
    """
    employee = service.get_by_id(employee_id)

    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee {employee_id} not found"
        )

    return EmployeeResponse.model_validate(employee)


@router.post('', response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    request: EmployeeCreateRequest,
    service: EmployeeService = Depends(get_employee_service),
    current_user: str = Depends(get_current_user)
):
    """
    Create an employee.

    Returns 422 when the payroll number is empty.
    """
    employee = service.create(request.to_model())
    logger.info(f"Employee {employee.id} created by {current_user}")
    return EmployeeResponse.model_validate(employee)


@router.put('/{employee_id}', response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    request: EmployeeUpdateRequest,
    service: EmployeeService = Depends(get_employee_service),
    current_user: str = Depends(get_current_user)
):
    """
    Replace an employee record.

    Every field is overwritten; omitted optional fields are cleared.
    Returns 404 for an unknown id and 422 for an empty payroll number.
    """
    employee = service.update(request.to_model(employee_id))
    logger.info(f"Employee {employee_id} updated by {current_user}")
    return EmployeeResponse.model_validate(employee)


@router.delete('/{employee_id}', response_model=SuccessResponse)
async def delete_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
    current_user: str = Depends(get_current_user)
):
    """
    Delete an employee.

    **Warning:** This operation cannot be undone.

    **Example:**
    ```bash
    curl -X DELETE http://localhost:8000/api/employees/123
    ```
    """
    service.delete(employee_id)
    logger.info(f"Employee {employee_id} deleted by {current_user}")

    return SuccessResponse(
        message="Employee deleted successfully!",
        data={'id': employee_id}
    )
