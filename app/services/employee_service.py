"""
Employee Service
Listing of employees with their department, and assignment of employees to departments
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy import select, update, insert, func
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from app.models.employee import Employee
from app.models.department import Department
from app.models.employee_department import EmployeeDepartment
from app.services.errors import EmployeeServiceError, NotFoundError, InternalError
from app.utils.date_utils import to_calendar_date, to_storage_format
from app.utils.input_validators import ListingParameters, EmployeeDepartmentAssignment

logger = logging.getLogger(__name__)

# Sort keys mapped to the columns they order by
ORDER_BY_COLUMNS = {
    'emp_no': Employee.emp_no,
    'birth_date': Employee.birth_date,
    'first_name': Employee.first_name,
    'last_name': Employee.last_name,
    'gender': Employee.gender,
    'hire_date': Employee.hire_date,
    'dept_name': Department.dept_name,
    'department': Department.dept_name,
}

ASSIGNMENT_INSERTED = 'inserted'
ASSIGNMENT_UPDATED = 'updated'


@dataclass
class EmployeeResponse:
    """A page of employees plus the size of the whole population"""
    total: int
    page: int
    employees: List[dict] = field(default_factory=list)

    def to_dict(self):
        return {
            'total': self.total,
            'page': self.page,
            'employees': self.employees
        }


class EmployeeService:
    """Service for employee listing and department assignment"""

    def __init__(self, session):
        self.session = session

    # ===== LISTING =====

    def get_employees(self, parameters: ListingParameters) -> EmployeeResponse:
        """
        Get one page of employees joined with their current department

        Args:
            parameters: Normalized listing parameters

        Returns:
            EmployeeResponse with the page and the unfiltered employee total

        Raises:
            InternalError: the query failed or a row could not be mapped
        """
        query = (
            select(Employee, Department.dept_name)
            .outerjoin(EmployeeDepartment, EmployeeDepartment.emp_no == Employee.emp_no)
            .outerjoin(Department, Department.dept_no == EmployeeDepartment.dept_no)
            .order_by(*self._order_by_clauses(parameters))
            .limit(parameters.limit)
            .offset(parameters.offset)
        )

        try:
            rows = self.session.execute(query).all()
            employees = [employee.to_dict(department_name=dept_name) for employee, dept_name in rows]
        except (SQLAlchemyError, ValueError, TypeError, OverflowError) as e:
            logger.error(f"error executing sql select query for employees: {e}")
            self.session.rollback()
            raise InternalError('error executing sql select query')

        total = self.get_total_employees()

        return EmployeeResponse(total=total, page=parameters.page, employees=employees)

    def get_total_employees(self) -> int:
        """Count every employee, regardless of paging or department"""
        try:
            return self.session.execute(select(func.count()).select_from(Employee)).scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"error executing sql count query for employees: {e}")
            self.session.rollback()
            raise InternalError('error executing sql count query')

    @staticmethod
    def _order_by_clauses(parameters):
        column = ORDER_BY_COLUMNS[parameters.order_by]
        clauses = [column.desc() if parameters.order == 'desc' else column.asc()]

        # Stable pages when the sort column has duplicates
        if parameters.order_by != 'emp_no':
            clauses.append(Employee.emp_no.asc())

        return clauses

    # ===== DEPARTMENT ASSIGNMENT =====

    def update_employee_department(self, assignment: EmployeeDepartmentAssignment) -> str:
        """
        Assign an employee to a department, inserting the assignment row when the
        employee has none and overwriting it in place otherwise

        All lookups and the write run in one transaction; the assignment row is
        locked while it is checked so concurrent requests for the same employee
        are serialized.

        Args:
            assignment: Validated employee number, department code and date range

        Returns:
            ASSIGNMENT_INSERTED or ASSIGNMENT_UPDATED

        Raises:
            NotFoundError: the employee or the department does not exist
            InternalError: any statement failed
        """
        try:
            self.get_employee_by_id(assignment.emp_no)
            self.get_department_by_id(assignment.dept_no)

            existing = self.get_employee_department(assignment.emp_no, for_update=True)
            if existing is None:
                self.create_employee_department(assignment)
                outcome = ASSIGNMENT_INSERTED
            else:
                self.overwrite_employee_department(assignment, existing)
                outcome = ASSIGNMENT_UPDATED

            self.session.commit()
        except EmployeeServiceError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"error committing employee department for employee: {assignment.emp_no}, {e}")
            self.session.rollback()
            raise InternalError('error committing employee department')

        return outcome

    def get_employee_by_id(self, emp_no: int) -> Employee:
        try:
            employee = self.session.execute(
                select(Employee).where(Employee.emp_no == emp_no)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"error executing sql select query for employee: {emp_no}, {e}")
            raise InternalError('error executing sql select query')

        if employee is None:
            logger.info(f"employee not found: {emp_no}")
            raise NotFoundError('employee not found')

        return employee

    def get_department_by_id(self, dept_no: str) -> Department:
        try:
            department = self.session.execute(
                select(Department).where(Department.dept_no == dept_no)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"error executing sql select query for department: {dept_no}, {e}")
            raise InternalError('error executing sql select query')

        if department is None:
            logger.info(f"department not found: {dept_no}")
            raise NotFoundError('department not found')

        return department

    def get_employee_department(self, emp_no: int, for_update=False) -> Optional[EmployeeDepartment]:
        """
        Get the current assignment of an employee

        Returns:
            EmployeeDepartment, or None when the employee has no assignment
        """
        query = select(EmployeeDepartment).where(EmployeeDepartment.emp_no == emp_no)
        if for_update:
            query = query.with_for_update()

        try:
            employee_department = self.session.execute(query).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"error executing sql select query employee department for employee: {emp_no}, {e}")
            raise InternalError('error executing sql select query for employee department')

        if employee_department is None:
            logger.info(f"employee department not found: {emp_no}")

        return employee_department

    def create_employee_department(self, assignment: EmployeeDepartmentAssignment):
        """Insert the assignment row; a row written concurrently for the same employee is overwritten"""
        statement = self._upsert_statement(self._assignment_values(assignment))
        try:
            result = self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"error executing sql insert query for employee department: {assignment.emp_no}, {e}")
            raise InternalError('error executing sql insert query for employee department')

        logger.info(
            f"employee department created for employee {assignment.emp_no} in {assignment.dept_no} "
            f"from {to_storage_format(assignment.from_date)} to {to_storage_format(assignment.to_date)}, "
            f"rows affected: {result.rowcount}"
        )

    def overwrite_employee_department(self, assignment: EmployeeDepartmentAssignment, existing=None):
        """Overwrite the department and date range of the existing assignment row"""
        values = self._assignment_values(assignment)
        del values['emp_no']

        statement = (
            update(EmployeeDepartment.__table__)
            .where(EmployeeDepartment.__table__.c.emp_no == assignment.emp_no)
            .values(**values)
        )
        try:
            result = self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"error executing sql update query for employee department: {assignment.emp_no}, {e}")
            raise InternalError('error executing sql update query for employee department')

        if existing is not None:
            self.session.expire(existing)

        logger.info(
            f"employee department updated for employee {assignment.emp_no} to {assignment.dept_no} "
            f"from {to_storage_format(assignment.from_date)} to {to_storage_format(assignment.to_date)}, "
            f"rows affected: {result.rowcount}"
        )

    @staticmethod
    def _assignment_values(assignment):
        return {
            'emp_no': assignment.emp_no,
            'dept_no': assignment.dept_no,
            'from_date': to_calendar_date(assignment.from_date),
            'to_date': to_calendar_date(assignment.to_date),
        }

    def _upsert_statement(self, values):
        """
        Build a single INSERT that turns into an UPDATE when the employee already
        has an assignment row
        """
        table = EmployeeDepartment.__table__
        dialect = self.session.get_bind().dialect.name

        if dialect == 'mysql':
            statement = mysql.insert(table).values(**values)
            return statement.on_duplicate_key_update(
                dept_no=statement.inserted.dept_no,
                from_date=statement.inserted.from_date,
                to_date=statement.inserted.to_date,
            )

        if dialect in ('sqlite', 'postgresql'):
            dialect_module = sqlite if dialect == 'sqlite' else postgresql
            statement = dialect_module.insert(table).values(**values)
            return statement.on_conflict_do_update(
                index_elements=[table.c.emp_no],
                set_={
                    'dept_no': statement.excluded.dept_no,
                    'from_date': statement.excluded.from_date,
                    'to_date': statement.excluded.to_date,
                },
            )

        return insert(table).values(**values)
