import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "presence_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Kiosk codes rotate every ACCESS_CODE_TTL_SECONDS; manual codes live for whole minutes.
ACCESS_CODE_TTL_SECONDS = int(os.getenv("ACCESS_CODE_TTL_SECONDS", "30"))
ACCESS_CODE_LENGTH = int(os.getenv("ACCESS_CODE_LENGTH", "10"))
MANUAL_CODE_TTL_MINUTES = int(os.getenv("MANUAL_CODE_TTL_MINUTES", "1"))

# New kiosks are attached to this branch on first poll.
DEFAULT_BRANCH_ID = int(os.getenv("DEFAULT_BRANCH_ID", "1"))
DEFAULT_BRANCH_NAME = os.getenv("DEFAULT_BRANCH_NAME", "Main Branch")

SCHEDULE_HEADER_ROW = int(os.getenv("SCHEDULE_HEADER_ROW", "3"))
SCHEDULE_FIRST_DAY_COLUMN = int(os.getenv("SCHEDULE_FIRST_DAY_COLUMN", "2"))
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
