"""
Pytest configuration and fixtures for employee records tests.
"""

import csv
import io
import os
from datetime import date

import pytest
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Load environment
load_dotenv()

# Test database URL (SQLite in memory unless a separate test database is given)
TEST_DATABASE_URL = os.getenv('TEST_DATABASE_URL', 'sqlite://')

# The application engine is created on import; keep it off any real database
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ.setdefault('LOG_FILE', os.devnull)

from backend.models.schema import Base, Employee  # noqa: E402
from backend.repositories.employee_repository import EmployeeRepository  # noqa: E402
from services.column_mapper import COLUMN_MAP  # noqa: E402
from services.employee_service import EmployeeService  # noqa: E402

IMPORT_HEADERS = [header for header, _ in COLUMN_MAP]


@pytest.fixture(scope='function')
def engine():
    """Create a fresh test database for each test."""
    if TEST_DATABASE_URL.startswith('sqlite'):
        eng = create_engine(
            TEST_DATABASE_URL,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool
        )
    else:
        eng = create_engine(TEST_DATABASE_URL)

    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture(scope='function')
def session(engine):
    """Create a new database session for a test."""
    Session = sessionmaker(bind=engine)
    sess = Session()

    yield sess

    sess.close()


@pytest.fixture
def repository(session):
    return EmployeeRepository(session)


@pytest.fixture
def service(repository):
    return EmployeeService(repository)


@pytest.fixture
def make_employee(repository):
    """Factory inserting an employee with sensible defaults."""
    counter = {'n': 0}

    def _make(**fields):
        counter['n'] += 1
        values = {
            'payroll_number': f"P{counter['n']:04d}",
            'forenames': 'Test',
            'surname': f"Surname{counter['n']}",
            'date_of_birth': date(1990, 1, 1),
            'start_date': date(2020, 1, 1),
        }
        values.update(fields)
        return repository.add(Employee(**values))

    return _make


@pytest.fixture
def make_csv():
    """Build CSV bytes from a header list and rows (lists or header->value dicts)."""
    def _make(rows=(), headers=None):
        headers = list(headers) if headers is not None else IMPORT_HEADERS
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(headers)
        for row in rows:
            if isinstance(row, dict):
                row = [row.get(h, '') for h in headers]
            writer.writerow(row)
        return output.getvalue().encode('utf-8')

    return _make


@pytest.fixture
def sample_row():
    """A fully populated import row keyed by external header."""
    return {
        'Personnel_Records.Payroll_Number': '123',
        'Personnel_Records.Forenames': 'John',
        'Personnel_Records.Surname': 'Doe',
        'Personnel_Records.Date_of_Birth': '1990-01-01',
        'Personnel_Records.Telephone': '01234 567890',
        'Personnel_Records.Mobile': '07700 900000',
        'Personnel_Records.Address': '1 High Street',
        'Personnel_Records.Address_2': 'Springfield',
        'Personnel_Records.Postcode': 'AB1 2CD',
        'Personnel_Records.EMail_Home': 'john.doe@example.com',
        'Personnel_Records.Start_Date': '2020-01-01',
    }


@pytest.fixture
def client(engine):
    """FastAPI test client bound to the test database."""
    from fastapi.testclient import TestClient
    from api.dependencies import get_db
    from api.main import app

    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
