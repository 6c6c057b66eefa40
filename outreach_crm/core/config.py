"""Environment-driven settings.

Values are read once at import time; ``outreach_crm.main`` loads ``.env``
before anything imports this module.
"""

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Database
DB_USER = os.getenv("DB_USER", "")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_HOST = os.getenv("DB_HOST", "")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME", "")


def _database_url() -> str:
    explicit = os.getenv("DATABASE_URL", "").strip()
    if explicit:
        return explicit
    if DB_USER and DB_HOST and DB_NAME:
        return f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    # Local development fallback
    return "sqlite:///./outreach_crm.db"


DATABASE_URL = _database_url()
AUTO_CREATE_TABLES = _env_bool("AUTO_CREATE_TABLES", True)

# Identity service (Supabase auth)
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
AUTH_REQUIRED = _env_bool("AUTH_REQUIRED", True)
AUTH_TIMEOUT_SECONDS = float(os.getenv("AUTH_TIMEOUT_SECONDS", "10"))

# Error tracking
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
APP_ENV = os.getenv("APP_ENV", "development")
APP_ID = os.getenv("APP_ID", "outreach-crm")

# HTTP
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
