import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_session_test"),
}

API_BASE_URL = os.getenv("API_BASE_URL", "http://testserver/api")
API_TIMEOUT_SECONDS = 2.0
API_TOKEN = None

COUNTDOWN_TICK_SECONDS = 0.01

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
