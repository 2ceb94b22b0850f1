"""
Employee Model
Tracks employee records and their personal information
"""
from app import db
from app.utils.date_utils import to_rfc3339


class Employee(db.Model):
    """Employee model for HR records"""
    __tablename__ = 'employees'

    # Employee identification
    emp_no = db.Column(db.Integer, primary_key=True, autoincrement=False)

    # Personal information
    birth_date = db.Column(db.Date, nullable=False)
    first_name = db.Column(db.String(14), nullable=False)
    last_name = db.Column(db.String(16), nullable=False)
    gender = db.Column(db.String(1), nullable=False)  # M, F

    # Employment information
    hire_date = db.Column(db.Date, nullable=False)

    def __repr__(self):
        return f'<Employee {self.emp_no}: {self.full_name}>'

    @property
    def full_name(self):
        """Get employee's full name"""
        return f'{self.first_name} {self.last_name}'

    def to_dict(self, department_name=None):
        """
        Convert employee to dictionary for JSON responses

        Args:
            department_name: Name of the department joined in by the listing query.
                The key is left out when the employee has no department.
        """
        data = {
            'emp_no': self.emp_no,
            'birth_date': to_rfc3339(self.birth_date),
            'first_name': self.first_name,
            'last_name': self.last_name,
            'gender': self.gender,
            'hire_date': to_rfc3339(self.hire_date),
        }
        if department_name is not None:
            data['department'] = department_name
        return data
