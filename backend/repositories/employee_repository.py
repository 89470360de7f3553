"""
Employee repository - data access over a SQLAlchemy session.

Every mutating call commits immediately. Filtering, ordering and paging
are left to callers through query().
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Query, Session

from backend.models.schema import Employee

logger = logging.getLogger(__name__)


class EmployeeRepository:
    """Data access for Employee records."""

    def __init__(self, session: Session):
        self.session = session

    def query(self) -> Query:
        """Return a composable query over all employees."""
        return self.session.query(Employee)

    def get_all(self) -> List[Employee]:
        """Get all employees ordered by surname."""
        return self.session.query(Employee).order_by(Employee.surname, Employee.id).all()

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.session.query(Employee).filter_by(id=employee_id).first()

    def add(self, employee: Employee) -> Employee:
        self.session.add(employee)
        self.session.commit()
        self.session.refresh(employee)
        logger.debug(f"Added employee {employee.id}")
        return employee

    def update(self, employee: Employee) -> Employee:
        employee = self.session.merge(employee)
        self.session.commit()
        logger.debug(f"Updated employee {employee.id}")
        return employee

    def delete(self, employee_id: int) -> bool:
        """
        Delete an employee by id.

        Returns:
            True if a row was removed, False if the id did not exist
        """
        employee = self.session.get(Employee, employee_id)
        if employee is None:
            return False

        self.session.delete(employee)
        self.session.commit()
        logger.debug(f"Deleted employee {employee_id}")
        return True

    def bulk_insert(self, employees: Iterable[Employee]) -> int:
        """Insert all employees and commit once."""
        employees = list(employees)
        self.session.add_all(employees)
        self.session.commit()
        logger.info(f"Bulk inserted {len(employees)} employees")
        return len(employees)
