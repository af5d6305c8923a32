import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Zone assumed for organizations with no timezone configured.
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "Africa/Johannesburg")

GRACE_MINUTES = int(os.getenv("GRACE_MINUTES", "15"))
STANDARD_WORK_MINUTES = int(os.getenv("STANDARD_WORK_MINUTES", "480"))
SCHEDULE_CACHE_TTL_SECONDS = int(os.getenv("SCHEDULE_CACHE_TTL_SECONDS", "1800"))
