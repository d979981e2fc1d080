import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tuition_center_test"),
    "connection_timeout": 5,
}

SENDGRID_API_KEY = None
FROM_EMAIL = "reports@example.com"
ADMIN_EMAIL = "admin@example.com"
ORGANIZATION_NAME = "Zero to Hero Education"
EMAIL_TIMEOUT_SECONDS = 5

CRON_SECRET = "test-cron-secret"

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
