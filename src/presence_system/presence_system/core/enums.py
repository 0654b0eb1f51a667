from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance event status as stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EARLY_LEAVE = "early_leave"


class ShiftCode(str, Enum):
    """Day-level shift marker recorded on a shift assignment."""

    MORNING = "morning"
    EVENING = "evening"
    OFF = "off"
    WORKING = "working"


class AssignmentStatus(str, Enum):
    ASSIGNED = "assigned"
