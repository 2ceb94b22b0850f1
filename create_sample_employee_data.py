"""
Create sample employee data for local development
Run this script to populate the database with departments, employees and their assignments
"""
import os
from datetime import date

from dotenv import load_dotenv

load_dotenv()

from app import create_app, db
from app.models.employee import Employee
from app.models.department import Department
from app.models.employee_department import EmployeeDepartment


SAMPLE_DEPARTMENTS = [
    ('d001', 'Marketing'),
    ('d002', 'Finance'),
    ('d003', 'Human Resources'),
    ('d004', 'Production'),
    ('d005', 'Development'),
    ('d006', 'Quality Management'),
    ('d007', 'Sales'),
    ('d008', 'Research'),
    ('d009', 'Customer Service'),
]

SAMPLE_EMPLOYEES = [
    # emp_no, first name, last name, gender, birth date, hire date, department
    (1, 'Lucas', 'Lissandrello', 'M', date(1994, 11, 8), date(2022, 6, 20), 'd005'),
    (10001, 'Georgi', 'Facello', 'M', date(1953, 9, 2), date(1986, 6, 26), 'd005'),
    (10002, 'Bezalel', 'Simmel', 'F', date(1964, 6, 2), date(1985, 11, 21), None),
    (10003, 'Parto', 'Bamford', 'M', date(1959, 12, 3), date(1986, 8, 28), 'd004'),
    (10004, 'Chirstian', 'Koblick', 'M', date(1954, 5, 1), date(1986, 12, 1), 'd004'),
    (10005, 'Kyoichi', 'Maliniak', 'M', date(1955, 1, 21), date(1989, 9, 12), 'd003'),
]


def create_sample_employee_data():
    """Create sample departments, employees and assignments unless employees already exist"""
    existing_employees = Employee.query.count()
    if existing_employees > 0:
        print(f"Employees already exist ({existing_employees}), skipping sample data.")
        return

    print("Creating departments...")
    for dept_no, dept_name in SAMPLE_DEPARTMENTS:
        db.session.add(Department(dept_no=dept_no, dept_name=dept_name))
    db.session.flush()

    print("Creating employees...")
    for emp_no, first_name, last_name, gender, birth_date, hire_date, dept_no in SAMPLE_EMPLOYEES:
        db.session.add(Employee(
            emp_no=emp_no,
            first_name=first_name,
            last_name=last_name,
            gender=gender,
            birth_date=birth_date,
            hire_date=hire_date
        ))
    db.session.flush()

    print("Assigning employees to departments...")
    for emp_no, _, _, _, _, hire_date, dept_no in SAMPLE_EMPLOYEES:
        if dept_no is None:
            continue
        db.session.add(EmployeeDepartment(
            emp_no=emp_no,
            dept_no=dept_no,
            from_date=hire_date,
            to_date=date(9999, 1, 1)
        ))

    db.session.commit()
    print(f"Created {len(SAMPLE_DEPARTMENTS)} departments and {len(SAMPLE_EMPLOYEES)} employees.")


if __name__ == '__main__':
    app = create_app(os.getenv('FLASK_ENV', 'development'))
    with app.app_context():
        create_sample_employee_data()
