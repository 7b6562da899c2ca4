import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timekeeping_test"),
}

LOCAL_TIMEZONE = "America/Los_Angeles"

SYNC_BATCH_TIMEOUT_SECONDS = 120

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
