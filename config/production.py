import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_calendar_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

CLASSIFICATION_WORKERS = int(os.getenv("CLASSIFICATION_WORKERS", "8"))
DEFAULT_LATE_BUFFER_MINUTES = int(os.getenv("DEFAULT_LATE_BUFFER_MINUTES", "120"))
