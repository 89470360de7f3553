"""
SQLAlchemy models for the employee records system.

This module defines the database schema using SQLAlchemy ORM,
matching the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Date, Index, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Employee(Base):
    """Represents a single employee record."""

    __tablename__ = 'employees'
    __table_args__ = (
        Index('idx_employees_surname', 'surname'),
        Index('idx_employees_payroll_number', 'payroll_number'),
        {'comment': 'Employee personnel records'}
    )

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        nullable=False
    )
    payroll_number = Column(
        String,
        nullable=False,
        comment='Business key from the payroll system'
    )
    forenames = Column(String, nullable=True)
    surname = Column(String, nullable=True)
    date_of_birth = Column(
        Date,
        nullable=True,
        comment='Date of birth (0001-01-01 when not supplied on import)'
    )
    telephone = Column(String, nullable=True)
    mobile = Column(String, nullable=True)
    address = Column(String, nullable=True)
    address2 = Column(String, nullable=True)
    postcode = Column(String, nullable=True)
    email_home = Column(String, nullable=True)
    start_date = Column(
        Date,
        nullable=True,
        comment='Employment start date (0001-01-01 when not supplied on import)'
    )

    def __repr__(self):
        return f"<Employee(id={self.id}, payroll_number='{self.payroll_number}', surname='{self.surname}')>"
