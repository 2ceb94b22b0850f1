"""
Employees Routes
JSON endpoints for listing employees and assigning them to departments
"""
import logging
from flask import request, jsonify, current_app
from werkzeug.exceptions import BadRequest
from app.blueprints.employees import employees_bp
from app.services.errors import EmployeeServiceError, ValidationError, status_code_for
from app.utils.input_validators import (
    normalize_listing_parameters,
    parse_assignment_request,
    build_assignment
)

logger = logging.getLogger(__name__)


def get_employee_service():
    """Employee service built by the application factory"""
    return current_app.extensions['employee_service']


def write_response(status_code, payload):
    return jsonify(payload), status_code


def write_error(error, message=None):
    return write_response(status_code_for(error), {'message': message or error.message})


@employees_bp.route('/employees', methods=['GET'])
def get_employees():
    """List employees with their department, one page at a time"""
    try:
        parameters = normalize_listing_parameters(
            request.args,
            default_limit=current_app.config.get('EMPLOYEES_PER_PAGE', 50)
        )
    except EmployeeServiceError as e:
        return write_error(e)

    try:
        employees = get_employee_service().get_employees(parameters)
    except EmployeeServiceError as e:
        # Failure details stay in the logs
        return write_error(e, message='internal server error')

    return write_response(200, employees.to_dict())


@employees_bp.route('/employees_department', methods=['POST'])
def add_employee_to_department():
    """Assign an employee to a department for a date range"""
    try:
        body = request.get_json(force=True)
    except BadRequest:
        body_error = ValidationError('bad request, wrong request body')
        logger.info(f"rejected employee department request: {body_error.message}")
        return write_error(body_error)

    try:
        assignment = build_assignment(parse_assignment_request(body))
    except EmployeeServiceError as e:
        logger.info(f"rejected employee department request: {e.message}")
        return write_error(e)

    try:
        get_employee_service().update_employee_department(assignment)
    except EmployeeServiceError as e:
        return write_error(e)

    return write_response(200, {'message': "employee's department updated successfully"})
