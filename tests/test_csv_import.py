"""
Tests for bulk employee import.

The import is all-or-nothing: a bad row anywhere in the file leaves the
table untouched.
"""

import codecs
import io
from datetime import date, datetime

import openpyxl
import pytest

from services.column_mapper import default_mapper
from services.csv_import_service import CsvImportService
from services.date_parser import ZERO_DATE
from services.exceptions import EmptyInputError, FormatError, ValidationError


class RecordingRepository:
    """Stands in for EmployeeRepository and records bulk inserts."""

    def __init__(self):
        self.batches = []

    def bulk_insert(self, employees):
        employees = list(employees)
        self.batches.append(employees)
        return len(employees)


def _import(service, content, filename='employees.csv'):
    return service.import_csv(io.BytesIO(content), filename)


class TestImportCsv:
    """Test the CSV import workflow against the database."""

    def test_full_row(self, service, repository, make_csv, sample_row):
        count = _import(service, make_csv([sample_row]))

        assert count == 1
        employees = repository.get_all()
        assert len(employees) == 1

        employee = employees[0]
        assert employee.payroll_number == '123'
        assert employee.forenames == 'John'
        assert employee.surname == 'Doe'
        assert employee.date_of_birth == date(1990, 1, 1)
        assert employee.start_date == date(2020, 1, 1)
        assert employee.address2 == 'Springfield'
        assert employee.email_home == 'john.doe@example.com'

    def test_mixed_date_formats(self, service, repository, make_csv, sample_row):
        rows = []
        for i, text in enumerate(['31/12/1985', '1/2/1985', '1985-12-31', '12/31/1985']):
            row = dict(sample_row)
            row['Personnel_Records.Payroll_Number'] = str(i)
            row['Personnel_Records.Date_of_Birth'] = text
            rows.append(row)

        assert _import(service, make_csv(rows)) == 4

        births = {e.payroll_number: e.date_of_birth for e in repository.get_all()}
        assert births == {
            '0': date(1985, 12, 31),
            '1': date(1985, 2, 1),
            '2': date(1985, 12, 31),
            '3': date(1985, 12, 31),
        }

    def test_header_only_file_is_rejected(self, service, repository, make_csv):
        with pytest.raises(EmptyInputError):
            _import(service, make_csv([]))
        assert repository.get_all() == []

    def test_empty_file_is_rejected(self, service):
        with pytest.raises(EmptyInputError):
            _import(service, b'')

    def test_undecodable_file_is_rejected(self, service):
        with pytest.raises(EmptyInputError):
            _import(service, b'\xff\xfe\x00bad')

    def test_bad_date_aborts_whole_import(self, service, repository, make_csv, sample_row):
        bad = dict(sample_row)
        bad['Personnel_Records.Payroll_Number'] = '456'
        bad['Personnel_Records.Start_Date'] = '2020/01/01'

        with pytest.raises(FormatError) as exc_info:
            _import(service, make_csv([sample_row, bad]))

        error = exc_info.value
        assert error.text == '2020/01/01'
        assert error.row == 3
        assert error.column == 'Personnel_Records.Start_Date'
        assert 'row 3' in str(error)
        assert repository.get_all() == []

    def test_bad_date_on_first_data_row(self, service, make_csv, sample_row):
        sample_row['Personnel_Records.Date_of_Birth'] = '31/02/1990'

        with pytest.raises(FormatError) as exc_info:
            _import(service, make_csv([sample_row]))

        assert exc_info.value.row == 2
        assert exc_info.value.column == 'Personnel_Records.Date_of_Birth'

    def test_missing_columns_get_zero_values(self, service, repository, make_csv):
        content = make_csv(
            [['123', 'Doe']],
            headers=['Personnel_Records.Payroll_Number', 'Personnel_Records.Surname']
        )

        assert _import(service, content) == 1

        employee = repository.get_all()[0]
        assert employee.surname == 'Doe'
        assert employee.forenames == ''
        assert employee.email_home == ''
        assert employee.date_of_birth == ZERO_DATE
        assert employee.start_date == ZERO_DATE

    def test_blank_date_cell_gets_zero_date(self, service, repository, make_csv, sample_row):
        sample_row['Personnel_Records.Start_Date'] = ''

        _import(service, make_csv([sample_row]))

        assert repository.get_all()[0].start_date == ZERO_DATE

    def test_extra_columns_are_ignored(self, service, repository, make_csv, sample_row):
        headers = ['Notes'] + default_mapper.headers() + ['Department']
        row = dict(sample_row, Notes='ignore me', Department='Sales')

        assert _import(service, make_csv([row], headers=headers)) == 1
        assert repository.get_all()[0].surname == 'Doe'

    def test_values_are_not_trimmed(self, service, repository, make_csv, sample_row):
        sample_row['Personnel_Records.Forenames'] = '  John '

        _import(service, make_csv([sample_row]))

        assert repository.get_all()[0].forenames == '  John '

    def test_long_values_are_stored_whole(self, service, repository, make_csv, sample_row):
        sample_row['Personnel_Records.Payroll_Number'] = 'P' * 60
        sample_row['Personnel_Records.Address'] = 'A' * 300

        assert _import(service, make_csv([sample_row])) == 1

        employee = repository.get_all()[0]
        assert employee.payroll_number == 'P' * 60
        assert employee.address == 'A' * 300

    def test_blank_lines_are_skipped(self, service, repository, make_csv, sample_row):
        content = make_csv([sample_row]) + b'\r\n,,,,,,,,,,\r\n'

        assert _import(service, content) == 1
        assert len(repository.get_all()) == 1

    def test_missing_payroll_number_is_rejected(self, service, repository, make_csv, sample_row):
        second = dict(sample_row)
        second['Personnel_Records.Payroll_Number'] = ''

        with pytest.raises(ValidationError) as exc_info:
            _import(service, make_csv([sample_row, second]))

        assert exc_info.value.field == 'payroll_number'
        assert 'row 3' in str(exc_info.value)
        assert repository.get_all() == []

    def test_utf8_bom_is_stripped(self, service, repository, make_csv, sample_row):
        content = codecs.BOM_UTF8 + make_csv([sample_row])

        assert _import(service, content) == 1
        assert repository.get_all()[0].payroll_number == '123'

    def test_quoted_fields(self, service, repository, make_csv, sample_row):
        sample_row['Personnel_Records.Address'] = '1 High Street, Flat "A"'

        _import(service, make_csv([sample_row]))

        assert repository.get_all()[0].address == '1 High Street, Flat "A"'

    def test_import_file_from_disk(self, service, repository, make_csv, sample_row, tmp_path):
        path = tmp_path / 'personnel.csv'
        path.write_bytes(make_csv([sample_row]))

        assert service.importer.import_file(str(path)) == 1
        assert repository.get_all()[0].surname == 'Doe'


class TestImportWorkbook:
    """Test .xlsx uploads."""

    @staticmethod
    def _workbook_bytes(rows):
        workbook = openpyxl.Workbook()
        worksheet = workbook.active
        worksheet.append(default_mapper.headers())
        for row in rows:
            worksheet.append(row)

        stream = io.BytesIO()
        workbook.save(stream)
        return stream.getvalue()

    def test_typed_cells(self, service, repository):
        content = self._workbook_bytes([
            [123, 'John', 'Doe', datetime(1990, 1, 1), None, None,
             '1 High Street', None, 'AB1 2CD', None, '01/02/2020'],
        ])

        assert _import(service, content, 'personnel.xlsx') == 1

        employee = repository.get_all()[0]
        assert employee.payroll_number == '123'
        assert employee.date_of_birth == date(1990, 1, 1)
        assert employee.start_date == date(2020, 2, 1)
        assert employee.telephone == ''

    def test_corrupt_workbook_is_rejected(self, service):
        with pytest.raises(EmptyInputError):
            _import(service, b'not a zip file', 'personnel.xlsx')


class TestImportPipeline:
    """Test the service against a recording repository."""

    def test_single_bulk_insert(self, make_csv, sample_row):
        repository = RecordingRepository()
        importer = CsvImportService(repository)

        second = dict(sample_row)
        second['Personnel_Records.Payroll_Number'] = '456'

        assert importer.import_stream(io.BytesIO(make_csv([sample_row, second]))) == 2
        assert len(repository.batches) == 1
        assert [e.payroll_number for e in repository.batches[0]] == ['123', '456']

    def test_nothing_inserted_on_error(self, make_csv, sample_row):
        repository = RecordingRepository()
        importer = CsvImportService(repository)
        sample_row['Personnel_Records.Date_of_Birth'] = 'yesterday'

        with pytest.raises(FormatError):
            importer.import_stream(io.BytesIO(make_csv([sample_row])))

        assert repository.batches == []

    def test_progress_callback(self, make_csv, sample_row):
        events = []
        importer = CsvImportService(
            RecordingRepository(),
            progress_callback=lambda stage, percent, message: events.append((stage, percent))
        )

        importer.import_stream(io.BytesIO(make_csv([sample_row])))

        assert [stage for stage, _ in events] == ['parsing', 'mapping', 'insertion', 'complete']
        assert events[-1][1] == 100

    def test_custom_date_formats(self, make_csv, sample_row):
        repository = RecordingRepository()
        importer = CsvImportService(repository, date_formats=['yyyy-MM-dd'])
        sample_row['Personnel_Records.Start_Date'] = '01/01/2020'

        with pytest.raises(FormatError) as exc_info:
            importer.import_stream(io.BytesIO(make_csv([sample_row])))

        assert exc_info.value.formats == ('yyyy-MM-dd',)
