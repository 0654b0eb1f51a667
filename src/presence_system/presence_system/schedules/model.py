from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from ..core.constants import (
    DEFAULT_SCHEDULE_FIRST_DAY_COLUMN,
    DEFAULT_SCHEDULE_HEADER_ROW,
    DEFAULT_SCHEDULE_NAME_COLUMN,
    DEFAULT_SCHEDULE_NUMBER_COLUMN,
)
from ..core.enums import AssignmentStatus, ShiftCode


@dataclass(frozen=True)
class ShiftAssignment:
    """Day-level assignment of an employee to a shift code. Append-only."""

    assignment_id: int
    employee_id: int
    shift_id: Optional[int]
    assigned_date: date
    shift_code: ShiftCode
    status: AssignmentStatus = AssignmentStatus.ASSIGNED
    notes: Optional[str] = None


@dataclass(frozen=True)
class AssignmentDraft:
    employee_id: int
    employee_number: str
    assigned_date: date
    shift_code: ShiftCode
    shift_id: Optional[int]
    status: AssignmentStatus = AssignmentStatus.ASSIGNED
    notes: Optional[str] = None


@dataclass(frozen=True)
class RowError:
    employee_number: str
    reason: str

    def to_dict(self) -> dict:
        return {"employeeNumber": self.employee_number, "reason": self.reason}


@dataclass(frozen=True)
class ImportResult:
    imported_count: int
    errors: Tuple[RowError, ...] = field(default_factory=tuple)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict:
        return {
            "importedCount": self.imported_count,
            "errorCount": self.error_count,
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass(frozen=True)
class ScheduleLayout:
    """Where things live in a monthly schedule sheet (0-based row/column indexes).

    Rows above ``header_row`` are free-form titles. The header row carries the
    day numbers; every non-blank employee-number cell below it is an employee row.
    """

    header_row: int = DEFAULT_SCHEDULE_HEADER_ROW
    number_column: int = DEFAULT_SCHEDULE_NUMBER_COLUMN
    name_column: int = DEFAULT_SCHEDULE_NAME_COLUMN
    first_day_column: int = DEFAULT_SCHEDULE_FIRST_DAY_COLUMN
