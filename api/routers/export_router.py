"""
Export router - CSV and Excel downloads of all employees.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from api.dependencies import get_employee_service
from services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

# Create router
router = APIRouter(prefix='/export', tags=['export'])


def _download(content: bytes, media_type: str, extension: str) -> Response:
    filename = f"employees_{datetime.now():%Y%m%d%H%M%S}.{extension}"
    return Response(
        content=content,
        media_type=media_type,
        headers={'Content-Disposition': f'attachment; filename="{filename}"'}
    )


@router.get('/csv')
async def export_csv(
    use_import_headers: bool = Query(False, description="Write Personnel_Records.* headers so the file re-imports"),
    service: EmployeeService = Depends(get_employee_service)
):
    """
    Download all employees as CSV.

    **Example:**
    ```bash
    curl -OJ http://localhost:8000/api/export/csv
    ```
    """
    return _download(service.export_csv(use_import_headers=use_import_headers), 'text/csv', 'csv')


@router.get('/excel')
async def export_excel(
    service: EmployeeService = Depends(get_employee_service)
):
    """Download all employees as an .xlsx workbook."""
    return _download(service.export_excel(), XLSX_MEDIA_TYPE, 'xlsx')
