"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * 60

# Built-in schedule used when an organization has no hours configured.
DEFAULT_OPEN_TIME = time(7, 30)
DEFAULT_CLOSE_TIME = time(16, 30)
DEFAULT_WORKING_DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")

DEFAULT_GRACE_MINUTES = 15
DEFAULT_STANDARD_MINUTES = 480

SCHEDULE_CACHE_TTL_SECONDS = 30 * 60

# Lateness tiers (minutes past start + grace).
VERY_LATE_MINUTES = 30
EXTREMELY_LATE_MINUTES = 60

# Hours-vs-minutes guess for free-text durations with no unit.
MAX_UNITLESS_HOURS = 24

# Rounding precision (decimal places) per use case.
PRECISION_HOURS = 2
PRECISION_PERCENTAGE = 1
PRECISION_DISPLAY = 1

NOT_AVAILABLE = "N/A"
