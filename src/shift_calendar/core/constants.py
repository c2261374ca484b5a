"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LATE_BUFFER_MINUTES = 120
MINUTES_PER_DAY = 24 * 60
DEFAULT_CLASSIFICATION_WORKERS = 4
DEFAULT_REPORT_DAYS = 7
MAX_RANGE_DAYS = 366
