"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Weekday

WEEKDAYS = tuple(d.value for d in Weekday)

SCHEDULE_SEPARATOR = "; "

DEFAULT_HOURS = 1.0
MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6

# Subjects under this percentage are flagged on the dashboard.
DEFAULT_LOW_ATTENDANCE_THRESHOLD = 75

DUPLICATE_ATTENDANCE_MESSAGE = "Attendance already marked for this subject on this date"
