import os


REQUIRED_DATABASE_SETTINGS = (
    'MYSQL_USER',
    'MYSQL_PASSWORD',
    'MYSQL_PORT',
    'MYSQL_HOST',
    'DB_NAME',
)


def missing_database_settings(environ=None):
    """
    Check the environment for the database settings the service cannot start without

    Returns:
        List of missing keys, empty when everything is set
    """
    environ = os.environ if environ is None else environ
    return [key for key in REQUIRED_DATABASE_SETTINGS if not environ.get(key)]


def parse_rate_limit(value):
    """
    Parse the RATE_LIMIT setting (requests per second per client)

    Returns:
        Integer rate, or None when rate limiting is disabled
    """
    if value is None or str(value).strip() == '':
        return None

    try:
        rate = int(str(value).strip())
    except ValueError:
        raise ValueError(f'RATE_LIMIT parameter is not a number: {value!r}')

    if rate < 0:
        raise ValueError(f'RATE_LIMIT parameter must not be negative: {value!r}')

    return rate or None


def build_database_uri(environ=None):
    """Build the SQLAlchemy URI for the MySQL instance described by the environment"""
    environ = os.environ if environ is None else environ
    return 'mysql+pymysql://{user}:{password}@{host}:{port}/{name}?charset=utf8mb4'.format(
        user=environ.get('MYSQL_USER', ''),
        password=environ.get('MYSQL_PASSWORD', ''),
        host=environ.get('MYSQL_HOST', ''),
        port=environ.get('MYSQL_PORT', ''),
        name=environ.get('DB_NAME', ''),
    )


class Config:
    """Base configuration"""
    SQLALCHEMY_DATABASE_URI = build_database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Database Connection Pool Configuration
    # 10 idle connections, 100 open connections in total, one hour lifetime
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'max_overflow': 90,
        'pool_pre_ping': True,
        'pool_recycle': 3600,
        'pool_timeout': 30,
        'connect_args': {
            'read_timeout': int(os.environ.get('MYSQL_READ_TIMEOUT', 30)),
            'write_timeout': int(os.environ.get('MYSQL_READ_TIMEOUT', 30)),
        },
    }

    # Rate limiting (requests per second per client address)
    RATE_LIMIT = os.environ.get('RATE_LIMIT')
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_ENABLED = True

    # Error Tracking
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Listing defaults
    EMPLOYEES_PER_PAGE = 50

    VALIDATE_ENVIRONMENT = True


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    SQLALCHEMY_ECHO = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('TEST_DATABASE_URL') or 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATE_LIMIT = None
    RATELIMIT_ENABLED = False  # Disable rate limiting in tests
    SENTRY_DSN = None
    VALIDATE_ENVIRONMENT = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
