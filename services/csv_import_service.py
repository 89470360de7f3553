"""
Employee Import Service - Framework-agnostic bulk import.

Reads a delimited file (or an .xlsx workbook) with a header row, maps the
columns onto Employee fields, parses the date columns and inserts the whole
batch in one repository call. Any bad row aborts the import before anything
is written.
"""

import csv
import io
import logging
import zipfile
from datetime import date, datetime
from pathlib import Path
from typing import Any, BinaryIO, Callable, Dict, Iterator, List, Optional, Sequence, Union

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from backend.models.schema import Employee
from backend.repositories.employee_repository import EmployeeRepository
from services.column_mapper import DATE_FIELDS, ColumnMapper, default_mapper
from services.date_parser import DATE_FORMATS, ZERO_DATE, parse_date
from services.exceptions import EmptyInputError, FormatError, ValidationError

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = ('.xlsx', '.xlsm')


class CsvImportService:
    """Bulk import of employee records from tabular files."""

    def __init__(
        self,
        repository: EmployeeRepository,
        mapper: ColumnMapper = default_mapper,
        date_formats: Sequence[str] = DATE_FORMATS,
        progress_callback: Optional[Callable[[str, float, str], None]] = None
    ):
        """
        Initialize import service.

        Args:
            repository: Repository receiving the bulk insert
            mapper: Header/field table
            date_formats: Accepted date patterns in priority order
            progress_callback: Optional callback(stage, percent, message)
        """
        self.repository = repository
        self.mapper = mapper
        self.date_formats = tuple(date_formats)
        self.progress_callback = progress_callback

    def _emit_progress(self, stage: str, percent: float, message: str):
        """Emit progress update if callback is registered."""
        if self.progress_callback:
            self.progress_callback(stage, percent, message)

    def read_rows(self, stream: BinaryIO, filename: Optional[str] = None) -> List[List[Any]]:
        """
        Read all rows (header first) from an uploaded file.

        Raises:
            EmptyInputError: If the bytes cannot be read as tabular data
        """
        if filename and Path(filename).suffix.lower() in EXCEL_EXTENSIONS:
            return self._read_workbook_rows(stream)
        return self._read_csv_rows(stream)

    def _read_csv_rows(self, stream: BinaryIO) -> List[List[Any]]:
        try:
            text = stream.read().decode('utf-8-sig')
            return list(csv.reader(io.StringIO(text, newline='')))
        except (UnicodeDecodeError, csv.Error) as e:
            raise EmptyInputError(f"CSV file is empty or invalid: {e}") from e

    def _read_workbook_rows(self, stream: BinaryIO) -> List[List[Any]]:
        try:
            workbook = openpyxl.load_workbook(io.BytesIO(stream.read()), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as e:
            raise EmptyInputError(f"Excel file is empty or invalid: {e}") from e

        try:
            worksheet = workbook.worksheets[0]
            return [list(row) for row in worksheet.iter_rows(values_only=True)]
        finally:
            workbook.close()

    @staticmethod
    def _cell_text(value: Any) -> str:
        """Render a non-date cell as text."""
        if value is None:
            return ''
        if isinstance(value, float) and value.is_integer():
            # Spreadsheets store numeric payroll numbers as floats
            return str(int(value))
        return str(value)

    @staticmethod
    def _is_blank(row: Sequence[Any]) -> bool:
        return all(value is None or value == '' for value in row)

    def build_employee(self, row: Sequence[Any], index: Dict[int, str], row_num: int) -> Employee:
        """
        Build one Employee from a data row.

        Fields with no column in the file keep their zero value.

        Raises:
            FormatError: If a date column cannot be parsed
        """
        values: Dict[str, Union[str, date]] = {
            field: (ZERO_DATE if field in DATE_FIELDS else '')
            for field in self.mapper.fields()
        }

        for position, field in index.items():
            if position >= len(row):
                continue

            value = row[position]
            if field in DATE_FIELDS:
                if not isinstance(value, (date, datetime)):
                    value = self._cell_text(value)
                try:
                    values[field] = parse_date(value, self.date_formats)
                except FormatError as e:
                    raise FormatError(e.text, e.formats, row=row_num,
                                      column=self.mapper.header_for_field(field)) from e
            elif isinstance(value, (date, datetime)):
                values[field] = value.isoformat()
            else:
                values[field] = self._cell_text(value)

        return Employee(**values)

    def iter_employees(self, rows: List[List[Any]]) -> Iterator[Employee]:
        """Yield Employees for every non-blank data row after the header."""
        if not rows:
            return

        header = [self._cell_text(h) for h in rows[0]]
        index = self.mapper.build_index(header)
        logger.debug(f"Mapped columns: {index}")

        for row_num, row in enumerate(rows[1:], start=2):
            if self._is_blank(row):
                continue

            employee = self.build_employee(row, index, row_num)
            if not (employee.payroll_number or '').strip():
                raise ValidationError(
                    'payroll_number',
                    f"Payroll number is required (row {row_num})"
                )
            yield employee

    def import_stream(self, stream: BinaryIO, filename: Optional[str] = None) -> int:
        """
        Main import workflow.

        Args:
            stream: Binary file object positioned at the start of the file
            filename: Original filename, used to detect .xlsx uploads

        Returns:
            Number of employees inserted

        Raises:
            FormatError: A date value could not be parsed
            ValidationError: A row has no payroll number
            EmptyInputError: The file holds no data rows
        """
        logger.info(f"Starting employee import from {filename or 'stream'}")

        self._emit_progress('parsing', 10, 'Reading file...')
        rows = self.read_rows(stream, filename)

        self._emit_progress('mapping', 40, f"Mapping {max(len(rows) - 1, 0)} rows...")
        employees = list(self.iter_employees(rows))

        if not employees:
            raise EmptyInputError("CSV file is empty or invalid.")

        self._emit_progress('insertion', 80, f"Inserting {len(employees)} employees...")
        count = self.repository.bulk_insert(employees)

        self._emit_progress('complete', 100, f"Imported {count} employees")
        logger.info(f"Imported {count} employees from {filename or 'stream'}")
        return count

    def import_file(self, file_path: str) -> int:
        """Import from a path on disk."""
        with open(file_path, 'rb') as f:
            return self.import_stream(f, Path(file_path).name)
