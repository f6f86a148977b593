"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SHIFT_DURATION_WEEKDAY_SECONDS = 30600  # 8h30
SHIFT_DURATION_SATURDAY_SECONDS = 25200  # 7h
SATURDAY = 5

COUNTDOWN_TICK_SECONDS = 1.0
DEFAULT_HISTORY_DAYS = 30
# A new correction cannot be requested for a day in one of these states.
CORRECTION_CLOSED_STATUSES = ("Pending", "Approved")

STORAGE_KEY_PREFIX = "@attendance"
CHECK_IN_TIMESTAMP_KEY = "check_in_timestamp"
SHIFT_END_TIMESTAMP_KEY = "shift_end_timestamp"
SHIFT_DURATION_KEY = "shift_duration"
