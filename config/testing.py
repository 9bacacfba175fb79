import os

SECRET_KEY = "test-secret"
SESSION_LIFETIME_DAYS = 1

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ojt_tracker_test"),
}

TIMEZONE = "Asia/Manila"
AM_PM_SPLIT = "12:00:00"
ABSENT_CUTOFF_HOUR = 8

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "/tmp/ojt_tracker_uploads")

SMTP_HOST = ""
SMTP_PORT = 587
SMTP_USERNAME = ""
SMTP_PASSWORD = ""
SMTP_SENDER = ""

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
