# Models package
from app.models.employee import Employee
from app.models.department import Department
from app.models.employee_department import EmployeeDepartment
