import os
import logging
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from config import config, build_database_uri, missing_database_settings, parse_rate_limit
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)

logger = logging.getLogger(__name__)


def init_sentry(app):
    """Initialize Sentry error tracking"""
    sentry_dsn = app.config.get('SENTRY_DSN')

    if sentry_dsn:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FlaskIntegration(),
                SqlalchemyIntegration(),
            ],
            traces_sample_rate=0.1,
            release=os.environ.get('RELEASE_VERSION', 'unknown'),
            environment=app.config.get('ENV_NAME', 'development'),
            send_default_pii=False,
            sample_rate=1.0,
        )
        logger.info(f"Sentry initialized for {app.config.get('ENV_NAME', 'development')} environment")
    else:
        logger.info("Sentry DSN not configured - error tracking disabled")


def init_rate_limit(app):
    """Turn the RATE_LIMIT setting into the limiter's default limit"""
    try:
        rate = parse_rate_limit(app.config.get('RATE_LIMIT'))
    except ValueError as e:
        raise RuntimeError(str(e)) from e

    if rate is None:
        app.config['RATELIMIT_ENABLED'] = False
    else:
        app.config['RATELIMIT_DEFAULT'] = f'{rate} per second'
        logger.info(f"rate limit set to {rate} requests per second")


def create_app(config_name='default'):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.config['ENV_NAME'] = config_name
    app.json.sort_keys = False

    if app.config.get('VALIDATE_ENVIRONMENT'):
        missing = missing_database_settings()
        if missing:
            raise RuntimeError(f"could not process environment: {', '.join(missing)}")
        app.config['SQLALCHEMY_DATABASE_URI'] = build_database_uri()

    # Initialize Sentry error tracking (do this early to catch initialization errors)
    init_sentry(app)
    init_rate_limit(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # Import all models for Flask-Migrate
    with app.app_context():
        from app.models import employee, department, employee_department

    # Services share the application's database session
    from app.services.employee_service import EmployeeService
    app.extensions['employee_service'] = EmployeeService(db.session)

    # Register blueprints
    from app.blueprints.employees import employees_bp

    app.register_blueprint(employees_bp)

    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'message': 'not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return jsonify({'message': 'method not allowed'}), 405

    @app.errorhandler(429)
    def ratelimit_error(error):
        return jsonify({'message': 'too many requests'}), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()  # Rollback any failed database transactions
        return jsonify({'message': 'internal server error'}), 500

    # Health check endpoint for monitoring and load balancers
    @app.route('/health')
    @limiter.exempt
    def health_check():
        """Health check endpoint - returns 200 if the database answers"""
        from sqlalchemy import text
        from sqlalchemy.exc import SQLAlchemyError

        health_status = {
            'status': 'healthy',
            'version': os.environ.get('RELEASE_VERSION', 'unknown'),
            'environment': config_name
        }

        try:
            db.session.execute(text('SELECT 1'))
            health_status['database'] = 'connected'
        except SQLAlchemyError as e:
            logger.error(f"health check failed to reach the database: {e}")
            db.session.rollback()
            health_status['status'] = 'unhealthy'
            health_status['database'] = 'error'
            return jsonify(health_status), 500

        return jsonify(health_status), 200

    return app
