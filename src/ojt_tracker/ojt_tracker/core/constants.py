"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Asia/Manila"

# Session split: a scan strictly before this time of day belongs to the AM session.
DEFAULT_AM_PM_SPLIT = "12:00:00"

# Late window for AM time-in, both bounds exclusive.
LATE_WINDOW_START = "08:01:00"
LATE_WINDOW_END = "12:00:00"

# Absent sweep does nothing before this local hour.
DEFAULT_ABSENT_CUTOFF_HOUR = 8

# Leave hours used when a leave request does not state its own duration.
DEFAULT_LEAVE_HOURS = "08:00:00"

RESET_CODE_TTL_SECONDS = 5 * 60
RESET_VERIFIED_TTL_SECONDS = 15 * 60
RESET_VERIFIED_MARKER = "VERIFIED"

CUSTOM_INTERN_ID_PREFIX = "Intern"

EXCUSE_LETTER_EXTENSIONS = frozenset({".pdf", ".docx", ".jpg", ".jpeg", ".png"})
