import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
# Lifetime of "remember me" sessions
SESSION_LIFETIME_DAYS = int(os.getenv("SESSION_LIFETIME_DAYS", "7"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ojt_tracker"),
}

TIMEZONE = os.getenv("TIMEZONE", "Asia/Manila")
AM_PM_SPLIT = os.getenv("AM_PM_SPLIT", "12:00:00")
ABSENT_CUTOFF_HOUR = int(os.getenv("ABSENT_CUTOFF_HOUR", "8"))

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads/excuse_letters")

SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_SENDER = os.getenv("SMTP_SENDER", "")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
