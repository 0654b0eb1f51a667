import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "presence_test_db"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ACCESS_CODE_TTL_SECONDS = 30
ACCESS_CODE_LENGTH = 10
MANUAL_CODE_TTL_MINUTES = 1

DEFAULT_BRANCH_ID = 1
DEFAULT_BRANCH_NAME = "Main Branch"

SCHEDULE_HEADER_ROW = 3
SCHEDULE_FIRST_DAY_COLUMN = 2
MAX_UPLOAD_MB = 10

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
