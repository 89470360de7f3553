"""Employee service exception hierarchy."""

from typing import Optional, Sequence


class EmployeeServiceError(Exception):
    """Base exception for all employee service errors."""


class ValidationError(EmployeeServiceError):
    """A required business field is missing or invalid."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class NotFoundError(EmployeeServiceError):
    """The targeted employee id does not exist."""

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} not found")


class FormatError(EmployeeServiceError):
    """A date value matched none of the accepted formats."""

    def __init__(self, text: str, formats: Sequence[str],
                 row: Optional[int] = None, column: Optional[str] = None):
        self.text = text
        self.formats = tuple(formats)
        self.row = row
        self.column = column

        message = f"Invalid date format: '{text}'. Supported formats: {', '.join(self.formats)}"
        if row is not None:
            location = f"row {row}" if column is None else f"row {row}, column '{column}'"
            message = f"{message} ({location})"
        super().__init__(message)


class EmptyInputError(EmployeeServiceError):
    """An import produced no usable rows."""

    def __init__(self, message: str = "Import file is empty or invalid."):
        super().__init__(message)
