"""
Employee Query Service - search, sort and paging over the employee table.

The sortable fields are a closed mapping from accepted names to columns.
Any other name falls back to ascending surname, so listing never fails on
user-supplied sort parameters.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import Query

from backend.models.schema import Employee
from backend.repositories.employee_repository import EmployeeRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5
DEFAULT_SORT_COLUMN = 'surname'

TEXT_COLUMNS = (
    Employee.payroll_number,
    Employee.forenames,
    Employee.surname,
    Employee.telephone,
    Employee.mobile,
    Employee.address,
    Employee.address2,
    Employee.postcode,
    Employee.email_home,
)

DATE_COLUMNS = (
    Employee.date_of_birth,
    Employee.start_date,
)

# API field names, Python attribute names and PascalCase column names;
# matching is case-sensitive
SORT_COLUMNS = {
    'Id': Employee.id,
    'PayrollNumber': Employee.payroll_number,
    'Forenames': Employee.forenames,
    'Surname': Employee.surname,
    'DateOfBirth': Employee.date_of_birth,
    'Telephone': Employee.telephone,
    'Mobile': Employee.mobile,
    'Address': Employee.address,
    'Address2': Employee.address2,
    'Postcode': Employee.postcode,
    'EmailHome': Employee.email_home,
    'StartDate': Employee.start_date,
    'id': Employee.id,
    'payrollNumber': Employee.payroll_number,
    'payroll_number': Employee.payroll_number,
    'forenames': Employee.forenames,
    'surname': Employee.surname,
    'dateOfBirth': Employee.date_of_birth,
    'date_of_birth': Employee.date_of_birth,
    'telephone': Employee.telephone,
    'mobile': Employee.mobile,
    'address': Employee.address,
    'address2': Employee.address2,
    'postcode': Employee.postcode,
    'emailHome': Employee.email_home,
    'email_home': Employee.email_home,
    'startDate': Employee.start_date,
    'start_date': Employee.start_date,
}


@dataclass
class PagedResult:
    """One page of employees plus the paging metadata."""

    items: List[Employee]
    total_count: int
    page: int
    page_size: int
    search: Optional[str] = None
    sort_column: Optional[str] = None
    sort_direction: Optional[str] = None

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def is_descending(sort_direction: Optional[str]) -> bool:
    """Descending only when the direction is 'desc' (any case)."""
    return (sort_direction or '').lower() == 'desc'


class EmployeeQueryService:
    """Builds filtered, ordered and paged employee queries."""

    def __init__(self, repository: EmployeeRepository, default_page_size: int = DEFAULT_PAGE_SIZE):
        self.repository = repository
        self.default_page_size = default_page_size

    @staticmethod
    def apply_search(query: Query, search: Optional[str]) -> Query:
        """Keep rows where any text field or date rendering contains the term."""
        if not search:
            return query

        term = search.lower()
        conditions = [
            func.lower(func.coalesce(column, ''), type_=String).contains(term, autoescape=True)
            for column in TEXT_COLUMNS
        ]
        conditions.extend(
            cast(column, String).contains(term, autoescape=True)
            for column in DATE_COLUMNS
        )
        return query.filter(or_(*conditions))

    @staticmethod
    def apply_sorting(query: Query, sort_column: Optional[str], descending: bool) -> Query:
        column = SORT_COLUMNS.get(sort_column or '')
        if column is None:
            if sort_column:
                logger.debug(f"Unknown sort column '{sort_column}', sorting by surname")
            return query.order_by(Employee.surname.asc(), Employee.id.asc())

        order = column.desc() if descending else column.asc()
        return query.order_by(order, Employee.id.asc())

    def get_paged(
        self,
        search: Optional[str] = None,
        sort_column: Optional[str] = DEFAULT_SORT_COLUMN,
        sort_direction: Optional[str] = 'asc',
        page: int = 1,
        page_size: Optional[int] = None
    ) -> PagedResult:
        """
        Get one page of employees.

        Args:
            search: Case-insensitive substring matched against every field
            sort_column: Field name to sort by (falls back to surname)
            sort_direction: 'desc' for descending, anything else ascending
            page: 1-based page number (values below 1 are treated as 1)
            page_size: Items per page (values below 1 use the default)

        Returns:
            PagedResult with total_count taken before paging
        """
        page = max(page or 1, 1)
        if not page_size or page_size < 1:
            page_size = self.default_page_size

        query = self.apply_search(self.repository.query(), search)
        total_count = query.count()

        query = self.apply_sorting(query, sort_column, is_descending(sort_direction))
        items = query.offset((page - 1) * page_size).limit(page_size).all()

        logger.debug(f"Employee page {page} (size {page_size}): "
                     f"{len(items)} of {total_count} matching '{search or ''}'")

        return PagedResult(
            items=items,
            total_count=total_count,
            page=page,
            page_size=page_size,
            search=search,
            sort_column=sort_column,
            sort_direction=sort_direction
        )
