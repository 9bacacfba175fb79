import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
# Lifetime of "remember me" sessions
SESSION_LIFETIME_DAYS = int(os.getenv("SESSION_LIFETIME_DAYS", "7"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ojt_tracker"),
}

# Local wall clock used for scans, sweeps and "today"
TIMEZONE = os.getenv("TIMEZONE", "Asia/Manila")
# Scans strictly before this time of day belong to the AM session
AM_PM_SPLIT = os.getenv("AM_PM_SPLIT", "12:00:00")
# The absent sweep does nothing before this hour
ABSENT_CUTOFF_HOUR = int(os.getenv("ABSENT_CUTOFF_HOUR", "8"))

UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads/excuse_letters")

# Empty SMTP_HOST -> reset codes are only logged
SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_SENDER = os.getenv("SMTP_SENDER", "")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo accounts on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
