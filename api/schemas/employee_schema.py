"""
Employee-related Pydantic schemas.

Field names are snake_case in Python and camelCase on the wire; both
spellings are accepted on input.
"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from api.schemas.common import PaginatedResponse
from backend.models.schema import Employee


class EmployeeBase(BaseModel):
    """Fields shared by create, update and response schemas."""

    payroll_number: str = Field(..., alias="payrollNumber",
                                description="Payroll number (required, non-empty)")
    forenames: Optional[str] = Field(None, description="Forenames")
    surname: Optional[str] = Field(None, description="Surname")
    date_of_birth: Optional[date] = Field(None, alias="dateOfBirth", description="Date of birth")
    telephone: Optional[str] = Field(None, description="Home telephone")
    mobile: Optional[str] = Field(None, description="Mobile number")
    address: Optional[str] = Field(None, description="Address line 1")
    address2: Optional[str] = Field(None, description="Address line 2")
    postcode: Optional[str] = Field(None, description="Postcode")
    email_home: Optional[str] = Field(None, alias="emailHome",
                                      description="Home e-mail address")
    start_date: Optional[date] = Field(None, alias="startDate", description="Employment start date")

    class Config:
        populate_by_name = True

    def to_model(self, employee_id: Optional[int] = None) -> Employee:
        """Build an Employee ORM object from this payload."""
        return Employee(id=employee_id, **self.model_dump(by_alias=False))


class EmployeeCreateRequest(EmployeeBase):
    """Request to create an employee."""

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "payrollNumber": "123",
                "forenames": "John",
                "surname": "Doe",
                "dateOfBirth": "1990-01-01",
                "telephone": "01234 567890",
                "mobile": "07700 900000",
                "address": "1 High Street",
                "address2": "Springfield",
                "postcode": "AB1 2CD",
                "emailHome": "john.doe@example.com",
                "startDate": "2020-01-01"
            }
        }


class EmployeeUpdateRequest(EmployeeBase):
    """Request to replace an employee record (every field is written)."""


class EmployeeResponse(EmployeeBase):
    """Employee data response schema."""

    id: int = Field(..., description="Employee ID")

    class Config:
        from_attributes = True
        populate_by_name = True


class EmployeeListResponse(PaginatedResponse[EmployeeResponse]):
    """Paginated employee list response."""

    search: Optional[str] = Field(None, description="Search term applied")
    sort_column: Optional[str] = Field(None, description="Requested sort column")
    sort_direction: Optional[str] = Field(None, description="Requested sort direction")

    @classmethod
    def from_paged_result(cls, result) -> 'EmployeeListResponse':
        """Create from a service PagedResult."""
        items: List[EmployeeResponse] = [EmployeeResponse.model_validate(e) for e in result.items]
        return cls.create(
            items=items,
            total=result.total_count,
            page=result.page,
            page_size=result.page_size,
            search=result.search,
            sort_column=result.sort_column,
            sort_direction=result.sort_direction
        )
