import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "meal_registration_test"),
    "connect_timeout": 1,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"

# In-memory local store, no background thread
LOCAL_STORE_PATH = ""
SYNC_INTERVAL_SECONDS = 30
ENABLE_SYNC_SCHEDULER = False
USER_CACHE_TTL_HOURS = 24
SERVE_STALE_USER_CACHE = True
ADMIN_SESSION_HOURS = 24
