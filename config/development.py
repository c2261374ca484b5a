import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_calendar_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Machine-days classified in parallel by a batch report
CLASSIFICATION_WORKERS = int(os.getenv("CLASSIFICATION_WORKERS", "4"))
# Used when a calendar has no valid lateBufferMinutes setting
DEFAULT_LATE_BUFFER_MINUTES = int(os.getenv("DEFAULT_LATE_BUFFER_MINUTES", "120"))
