import os
import logging
from dotenv import load_dotenv

# Load environment variables before the configuration is imported
load_dotenv()

from app import create_app

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO'),
    format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
)

# Create application
app = create_app(os.getenv('FLASK_ENV', 'production'))


@app.shell_context_processor
def make_shell_context():
    """Make database and models available in Flask shell"""
    from app import db
    from app.models.employee import Employee
    from app.models.department import Department
    from app.models.employee_department import EmployeeDepartment

    return {
        'db': db,
        'Employee': Employee,
        'Department': Department,
        'EmployeeDepartment': EmployeeDepartment
    }


if __name__ == '__main__':
    port = int(os.getenv('PORT', 80))
    # Only enable debug mode in development
    debug_mode = os.getenv('FLASK_ENV') == 'development'
    app.run(host='0.0.0.0', port=port, debug=debug_mode)
