import os


def _env_flag(name, default='false'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if not _database_url:
        # Build the URL from individual PG* variables when DATABASE_URL is missing
        pg_user = os.environ.get('PGUSER')
        pg_pass = os.environ.get('PGPASSWORD')
        pg_host = os.environ.get('PGHOST')
        pg_port = os.environ.get('PGPORT')
        pg_db = os.environ.get('PGDATABASE')
        if all([pg_user, pg_pass, pg_host, pg_port, pg_db]):
            _database_url = f"postgresql://{pg_user}:{pg_pass}@{pg_host}:{pg_port}/{pg_db}"

    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Files Settings
    SITE_BASE_URL = os.environ.get('SITE_BASE_URL')  # Falls back to the request root URL
    PUBLIC_FILES_PATH = os.environ.get('PUBLIC_FILES_PATH', 'static/assets/uploads')

    # Key-value Settings
    KEYVALUE_BACKEND = os.environ.get('KEYVALUE_BACKEND', 'database')  # database, memory
    KEYVALUE_MAX_RETRIES = int(os.environ.get('KEYVALUE_MAX_RETRIES', '5'))
    PATCH_MERGE_POLICY = os.environ.get('PATCH_MERGE_POLICY', 'stored')  # stored, incoming

    # Menu Settings
    MENU_MAX_DEPTH = int(os.environ.get('MENU_MAX_DEPTH', '9'))

    # API Auth Settings
    API_AUTH_REQUIRED = _env_flag('API_AUTH_REQUIRED')
    API_USERNAME = os.environ.get('API_USERNAME')
    API_PASSWORD = os.environ.get('API_PASSWORD')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'WARNING')


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # For in-memory SQLite during tests, keep engine options empty to avoid
    # passing invalid pool settings like pool_size to SQLite's StaticPool.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SITE_BASE_URL = 'http://portfolio.test'
    KEYVALUE_BACKEND = 'database'
    PATCH_MERGE_POLICY = 'stored'
    MENU_MAX_DEPTH = 9
    API_AUTH_REQUIRED = False
    API_USERNAME = None
    API_PASSWORD = None


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration by name, or based on FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
