"""
Pytest configuration and fixtures for the employee service tests
"""
from contextlib import contextmanager
from datetime import date

import pytest
from sqlalchemy import event
from app import create_app, db
from app.models.employee import Employee
from app.models.department import Department
from app.models.employee_department import EmployeeDepartment


@pytest.fixture(scope='session')
def app():
    """Create and configure a test application instance"""
    app = create_app('testing')

    # Establish an application context
    ctx = app.app_context()
    ctx.push()

    yield app

    ctx.pop()


@pytest.fixture(scope='session')
def _db(app):
    """Create test database"""
    db.create_all()
    yield db
    db.session.remove()


@pytest.fixture(scope='function', autouse=True)
def cleanup_db(_db):
    """Clean up database after each test"""
    yield

    # Rollback any open transactions
    _db.session.remove()

    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()


@pytest.fixture(scope='function')
def db_session(_db):
    """Provide the database session for tests"""
    return _db.session


@pytest.fixture
def client(app):
    """Create a test client"""
    return app.test_client()


@pytest.fixture
def stub_service(app):
    """Swap the employee service for a stand-in during one test"""
    original = app.extensions['employee_service']

    def install(service):
        app.extensions['employee_service'] = service
        return service

    yield install

    app.extensions['employee_service'] = original


@pytest.fixture
def record_statements(_db):
    """Record every SQL statement sent to the database inside a with block"""
    @contextmanager
    def recorder():
        statements = []

        def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            statements.append(statement.strip())

        event.listen(_db.engine, 'before_cursor_execute', before_cursor_execute)
        try:
            yield statements
        finally:
            event.remove(_db.engine, 'before_cursor_execute', before_cursor_execute)

    return recorder


@pytest.fixture
def test_department(db_session):
    """Create the Development department"""
    department = Department(dept_no='d005', dept_name='Development')
    db_session.add(department)
    db_session.commit()
    return department


@pytest.fixture
def test_department_2(db_session):
    """Create the Quality Management department"""
    department = Department(dept_no='d006', dept_name='Quality Management')
    db_session.add(department)
    db_session.commit()
    return department


@pytest.fixture
def test_employee(db_session):
    """Create an employee without a department"""
    employee = Employee(
        emp_no=10002,
        first_name='Bezalel',
        last_name='Simmel',
        gender='F',
        birth_date=date(1964, 6, 2),
        hire_date=date(1985, 11, 21)
    )
    db_session.add(employee)
    db_session.commit()
    return employee


@pytest.fixture
def assigned_employee(db_session, test_department):
    """Create employee 1 assigned to Development"""
    employee = Employee(
        emp_no=1,
        first_name='Lucas',
        last_name='Lissandrello',
        gender='M',
        birth_date=date(1994, 11, 8),
        hire_date=date(2022, 6, 20)
    )
    db_session.add(employee)
    db_session.flush()

    db_session.add(EmployeeDepartment(
        emp_no=employee.emp_no,
        dept_no=test_department.dept_no,
        from_date=date(2022, 6, 20),
        to_date=date(9999, 1, 1)
    ))
    db_session.commit()
    return employee
