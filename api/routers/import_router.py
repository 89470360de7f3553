"""
Import router - Handle employee file uploads.

The whole file is imported within the request: either every row is
inserted or none is.
"""

import io
import logging

from fastapi import APIRouter, UploadFile, File, Depends, status

from api.dependencies import (
    get_employee_service, get_current_user, verify_file_extension, verify_file_size
)
from api.schemas.import_schema import ImportResultResponse
from services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix='/import', tags=['import'])


@router.post('/csv', response_model=ImportResultResponse, status_code=status.HTTP_201_CREATED)
async def upload_employee_file(
    file: UploadFile = File(..., description="Employee file to import (.csv or .xlsx)"),
    service: EmployeeService = Depends(get_employee_service),
    current_user: str = Depends(get_current_user)
):
    """
    Upload a personnel file and import every row.

    **Workflow:**
    1. Validate file type and size
    2. Map `Personnel_Records.*` columns onto employee fields
    3. Parse both date columns (dd/MM/yyyy, d/M/yyyy, yyyy-MM-dd, MM/dd/yyyy)
    4. Insert all rows in one batch

    **Errors:**
    - 400 if a date cannot be parsed (row and column are reported)
    - 400 if the file has no data rows
    - 413 if the file is too large
    """
    logger.info(f"Import request from {current_user}: {file.filename}")

    # Validate file extension
    verify_file_extension(file.filename)

    content = await file.read()
    verify_file_size(len(content))

    logger.info(f"Received {file.filename} ({len(content) / 1024:.1f} KB)")

    count = service.import_csv(io.BytesIO(content), file.filename)

    return ImportResultResponse(
        imported=count,
        filename=file.filename,
        message=f"{count} records imported successfully!"
    )
