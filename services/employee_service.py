"""
Employee Service - business rules for employee records.

Framework-agnostic: used by the API routers and the CLI alike. The service
is built around an explicit repository so callers control the session.
"""

import logging
from typing import BinaryIO, Callable, Optional

from backend.models.schema import Employee
from backend.repositories.employee_repository import EmployeeRepository
from services.column_mapper import DATE_FIELDS, default_mapper
from services.csv_import_service import CsvImportService
from services.date_parser import ZERO_DATE
from services.exceptions import NotFoundError, ValidationError
from services.export_service import ExportService
from services.query_service import DEFAULT_PAGE_SIZE, EmployeeQueryService, PagedResult

logger = logging.getLogger(__name__)


class EmployeeService:
    """CRUD, listing, import and export of employees."""

    def __init__(
        self,
        repository: EmployeeRepository,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        progress_callback: Optional[Callable[[str, float, str], None]] = None
    ):
        self.repository = repository
        self.queries = EmployeeQueryService(repository, default_page_size=default_page_size)
        self.importer = CsvImportService(repository, progress_callback=progress_callback)
        self.exporter = ExportService(repository)

    @staticmethod
    def _validate(employee: Employee):
        if not (employee.payroll_number or '').strip():
            raise ValidationError('payroll_number', 'PayrollNumber is required.')

    @staticmethod
    def _fill_missing(employee: Employee):
        """Give unset fields the same zero values an import would store."""
        for field in default_mapper.fields():
            if getattr(employee, field) is None:
                setattr(employee, field, ZERO_DATE if field in DATE_FIELDS else '')

    def get_paged(self, search: Optional[str] = None, sort_column: Optional[str] = 'surname',
                  sort_direction: Optional[str] = 'asc', page: int = 1,
                  page_size: Optional[int] = None) -> PagedResult:
        return self.queries.get_paged(search, sort_column, sort_direction, page, page_size)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.repository.get_by_id(employee_id)

    def get(self, employee_id: int) -> Employee:
        """Like get_by_id, but raises NotFoundError for a missing id."""
        employee = self.repository.get_by_id(employee_id)
        if employee is None:
            raise NotFoundError(employee_id)
        return employee

    def create(self, employee: Employee) -> Employee:
        """
        Create an employee.

        Raises:
            ValidationError: If the payroll number is empty
        """
        self._validate(employee)
        self._fill_missing(employee)
        employee.id = None
        employee = self.repository.add(employee)
        logger.info(f"Created employee {employee.id} ({employee.payroll_number})")
        return employee

    def update(self, employee: Employee) -> Employee:
        """
        Replace an existing employee record (matched by id).

        Raises:
            ValidationError: If the payroll number is empty
            NotFoundError: If no employee has this id
        """
        self._validate(employee)
        if employee.id is None or self.repository.get_by_id(employee.id) is None:
            raise NotFoundError(employee.id)

        self._fill_missing(employee)
        employee = self.repository.update(employee)
        logger.info(f"Updated employee {employee.id}")
        return employee

    def delete(self, employee_id: int):
        """
        Delete an employee.

        Raises:
            NotFoundError: If no employee has this id
        """
        if not self.repository.delete(employee_id):
            raise NotFoundError(employee_id)
        logger.info(f"Deleted employee {employee_id}")

    def import_csv(self, stream: BinaryIO, filename: Optional[str] = None) -> int:
        """Bulk import; see CsvImportService.import_stream."""
        return self.importer.import_stream(stream, filename)

    def export_csv(self, use_import_headers: bool = False) -> bytes:
        return self.exporter.export_csv(use_import_headers=use_import_headers)

    def export_excel(self) -> bytes:
        return self.exporter.export_excel()
