import os


def _env_bool(name, default):
    return os.getenv(name, str(default)).strip().lower() in ('1', 'true', 'yes', 'on')


def database_url():
    """DATABASE_URL when set, otherwise a PostgreSQL URL from the DB_* variables."""
    url = os.getenv('DATABASE_URL')
    if url:
        return url

    db_host = os.getenv('DB_HOST', 'localhost')
    db_user = os.getenv('DB_USER', 'postgres')
    db_password = os.getenv('DB_PASSWORD', 'postgres')
    db_name = os.getenv('DB_NAME', 'products')
    db_port = os.getenv('DB_PORT', 5432)

    return f"postgresql+psycopg://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


class Config:
    SQLALCHEMY_DATABASE_URI = database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')

    RATE_LIMIT_PER_SECOND = float(os.getenv('RATE_LIMIT_PER_SECOND', 1.0))
    RATE_LIMIT_BURST = int(os.getenv('RATE_LIMIT_BURST', 3))
    DEFAULT_PAGE_SIZE = int(os.getenv('DEFAULT_PAGE_SIZE', 10))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_JSON = _env_bool('LOG_JSON', True)

    AUTO_MIGRATE = _env_bool('AUTO_MIGRATE', False)
    PORT = int(os.getenv('PORT', 8080))
