"""
Export Service - CSV and Excel downloads of all employees.
"""

import csv
import io
import logging
from datetime import date
from typing import Any, List

import openpyxl
from openpyxl.utils import get_column_letter

from backend.models.schema import Employee
from backend.repositories.employee_repository import EmployeeRepository
from services.column_mapper import ColumnMapper, default_mapper

logger = logging.getLogger(__name__)

# Header text and attribute, in the record's native field order
EXPORT_COLUMNS = (
    ('Id', 'id'),
    ('PayrollNumber', 'payroll_number'),
    ('Forenames', 'forenames'),
    ('Surname', 'surname'),
    ('DateOfBirth', 'date_of_birth'),
    ('Telephone', 'telephone'),
    ('Mobile', 'mobile'),
    ('Address', 'address'),
    ('Address2', 'address2'),
    ('Postcode', 'postcode'),
    ('EmailHome', 'email_home'),
    ('StartDate', 'start_date'),
)

EXCEL_SHEET_NAME = 'Employees'
EXCEL_MAX_COLUMN_WIDTH = 50
EXCEL_MIN_YEAR = 1900


class ExportService:
    """Serializes the full employee table."""

    def __init__(self, repository: EmployeeRepository, mapper: ColumnMapper = default_mapper):
        self.repository = repository
        self.mapper = mapper

    @staticmethod
    def _csv_value(value: Any) -> Any:
        if value is None:
            return ''
        if isinstance(value, date):
            return value.strftime('%Y-%m-%d')
        return value

    def export_csv(self, use_import_headers: bool = False) -> bytes:
        """
        Export all employees as CSV.

        Args:
            use_import_headers: Write the import file headers (without Id)
                so the output can be imported again

        Returns:
            UTF-8 encoded CSV bytes
        """
        employees = self.repository.get_all()

        if use_import_headers:
            headers = self.mapper.headers()
            attributes = self.mapper.fields()
        else:
            headers = [header for header, _ in EXPORT_COLUMNS]
            attributes = [attribute for _, attribute in EXPORT_COLUMNS]

        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(headers)
        for employee in employees:
            writer.writerow([self._csv_value(getattr(employee, a)) for a in attributes])

        logger.info(f"Exported {len(employees)} employees to CSV")
        return output.getvalue().encode('utf-8')

    def export_excel(self) -> bytes:
        """Export all employees as an .xlsx workbook (header on row 1)."""
        employees = self.repository.get_all()

        workbook = openpyxl.Workbook()
        worksheet = workbook.active
        worksheet.title = EXCEL_SHEET_NAME

        for col_idx, (header, _) in enumerate(EXPORT_COLUMNS, 1):
            worksheet.cell(row=1, column=col_idx, value=header)

        for row_idx, employee in enumerate(employees, 2):
            for col_idx, (_, attribute) in enumerate(EXPORT_COLUMNS, 1):
                value = getattr(employee, attribute)
                if isinstance(value, date) and value.year < EXCEL_MIN_YEAR:
                    # Excel has no serial for these; keep them readable as text
                    value = value.isoformat()

                cell = worksheet.cell(row=row_idx, column=col_idx, value=value)
                if isinstance(value, date):
                    cell.number_format = 'yyyy-mm-dd'

        self._adjust_column_widths(worksheet, employees)

        stream = io.BytesIO()
        workbook.save(stream)
        logger.info(f"Exported {len(employees)} employees to Excel")
        return stream.getvalue()

    @staticmethod
    def _adjust_column_widths(worksheet, employees: List[Employee]):
        for col_idx, (header, attribute) in enumerate(EXPORT_COLUMNS, 1):
            longest = max(
                [len(header)] + [len(str(getattr(e, attribute) or '')) for e in employees]
            )
            worksheet.column_dimensions[get_column_letter(col_idx)].width = min(
                longest + 2, EXCEL_MAX_COLUMN_WIDTH
            )
