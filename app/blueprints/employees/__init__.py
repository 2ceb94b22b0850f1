"""
Employees Blueprint
Handles employee listing and department assignment endpoints
"""
from flask import Blueprint

employees_bp = Blueprint('employees', __name__)

from app.blueprints.employees import routes
