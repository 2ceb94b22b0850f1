"""
Employee Department Model
Current assignment of an employee to a department for a date range
"""
from app import db


class EmployeeDepartment(db.Model):
    """
    Assignment of an employee to a department

    Keyed by employee number alone: an employee has at most one current
    assignment, and reassignment overwrites the row in place.
    """
    __tablename__ = 'dept_emp'

    emp_no = db.Column(db.Integer, db.ForeignKey('employees.emp_no', ondelete='CASCADE'), primary_key=True,
                       autoincrement=False)
    dept_no = db.Column(db.String(4), db.ForeignKey('departments.dept_no', ondelete='CASCADE'), nullable=False,
                        index=True)
    from_date = db.Column(db.Date, nullable=False)
    to_date = db.Column(db.Date, nullable=False)

    __table_args__ = (
        db.CheckConstraint('from_date <= to_date', name='check_dept_emp_date_range'),
    )

    def __repr__(self):
        return f'<EmployeeDepartment {self.emp_no} -> {self.dept_no}>'
