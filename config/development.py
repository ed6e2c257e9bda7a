import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "meal_registration_db"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed groups, settings and the default admin on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))

DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")

# Offline queue and user cache live here (JSON file)
LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", "instance/local_store.json")
SYNC_INTERVAL_SECONDS = int(os.getenv("SYNC_INTERVAL_SECONDS", "30"))
ENABLE_SYNC_SCHEDULER = bool(int(os.getenv("ENABLE_SYNC_SCHEDULER", "1")))
USER_CACHE_TTL_HOURS = int(os.getenv("USER_CACHE_TTL_HOURS", "24"))
SERVE_STALE_USER_CACHE = bool(int(os.getenv("SERVE_STALE_USER_CACHE", "1")))
ADMIN_SESSION_HOURS = int(os.getenv("ADMIN_SESSION_HOURS", "24"))
