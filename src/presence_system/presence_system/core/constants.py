"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_CODE_TTL_SECONDS = 30
DEFAULT_CODE_LENGTH = 10
DEFAULT_MANUAL_CODE_TTL_MINUTES = 1
CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-"

MANUAL_LOCATION = "manual"
DEFAULT_BRANCH_NAME = "Main Branch"

# Spreadsheet layout used by the organization's monthly schedule sheets.
DEFAULT_SCHEDULE_HEADER_ROW = 3
DEFAULT_SCHEDULE_NUMBER_COLUMN = 0
DEFAULT_SCHEDULE_NAME_COLUMN = 1
DEFAULT_SCHEDULE_FIRST_DAY_COLUMN = 2

# Cells containing any of these (case-insensitive) are leave/absence notes, not shifts.
LEAVE_MARKERS = ("izin", "rapor", "yok", "leave", "report", "absent")

MORNING_SHIFT_TERMS = ("sabah", "morning")
EVENING_SHIFT_TERMS = ("akşam", "aksam", "evening", "gece", "night")

IMPORT_NOTE_TEMPLATE = "Imported from spreadsheet ({code})"
