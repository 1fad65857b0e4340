"""Configuration settings for the package tracking service."""

import os


def get_store_backend():
    """Get the tracking store backend ("memory" or "sqlalchemy")."""
    return os.environ.get("TRACKING_STORE_BACKEND", "memory").lower()


def get_postgres_uri():
    """Get PostgreSQL connection URI from environment variables."""
    host = os.environ.get("DB_HOST", "localhost")
    port = 5433 if host == "localhost" else 5432
    password = os.environ.get("DB_PASSWORD", "tracking_pass")
    user = os.environ.get("DB_USER", "tracking_user")
    db_name = os.environ.get("DB_NAME", "tracking_db")
    return f"postgresql://{user}:{password}@{host}:{port}/{db_name}"


def get_database_uri():
    """Get SQLAlchemy database URI, falling back to a local SQLite file."""
    url = os.environ.get("DATABASE_URL")
    if url:
        return url
    if os.environ.get("DB_HOST"):
        return get_postgres_uri()
    return "sqlite:///tracking.db"


def get_seed_demo_data():
    """Whether an empty store gets the demo tracking records at start-up."""
    return os.environ.get("TRACKING_SEED_DEMO_DATA", "true").lower() == "true"


def get_api_host_and_port():
    """Get API bind address from environment variables."""
    host = os.environ.get("API_HOST", "localhost")
    port = int(os.environ.get("API_PORT", "8000"))
    return dict(host=host, port=port)


def get_api_url():
    """Get API URL from environment variables."""
    api_config = get_api_host_and_port()
    return f"http://{api_config['host']}:{api_config['port']}"


def get_log_level():
    return os.environ.get("LOG_LEVEL", "INFO").upper()
