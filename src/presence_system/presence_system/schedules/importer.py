from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import safe_date, spreadsheet_serial_to_date
from ..core.constants import EVENING_SHIFT_TERMS, IMPORT_NOTE_TEMPLATE, MORNING_SHIFT_TERMS
from ..core.enums import AssignmentStatus, ShiftCode
from ..employees.model import Employee
from ..shifts.model import Shift
from .codes import CellKind, classify_cell
from .model import AssignmentDraft, RowError, ScheduleLayout
from .spreadsheet import normalize_employee_number


def _match_shift(shifts: Iterable[Shift], terms: Sequence[str]) -> Optional[int]:
    for shift in shifts:
        name = (shift.shift_name or "").lower()
        if any(term in name for term in terms):
            return shift.shift_id
    return None


@dataclass(frozen=True)
class ImportSnapshot:
    """Directory and catalog as seen by one import call. Never refreshed mid-import."""

    employees_by_number: Mapping[str, Employee]
    morning_shift_id: Optional[int]
    evening_shift_id: Optional[int]

    @classmethod
    def build(cls, employees: Iterable[Employee], shifts: Iterable[Shift]) -> "ImportSnapshot":
        directory: Dict[str, Employee] = {}
        for employee in employees:
            directory.setdefault(str(employee.employee_number).strip(), employee)

        catalog = list(shifts)
        return cls(
            employees_by_number=MappingProxyType(directory),
            morning_shift_id=_match_shift(catalog, MORNING_SHIFT_TERMS),
            evening_shift_id=_match_shift(catalog, EVENING_SHIFT_TERMS),
        )

    def shift_id_for(self, code: ShiftCode) -> Optional[int]:
        if code is ShiftCode.MORNING:
            return self.morning_shift_id
        if code is ShiftCode.EVENING:
            return self.evening_shift_id
        return None


@dataclass
class ShiftTally:
    morning: int = 0
    evening: int = 0
    off: int = 0
    working: int = 0

    def add(self, code: ShiftCode) -> None:
        setattr(self, code.value, getattr(self, code.value) + 1)


@dataclass(frozen=True)
class DayColumn:
    column: int
    day: Optional[date]
    label: str


@dataclass
class ImportPlan:
    drafts: List[AssignmentDraft] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)
    tallies: Dict[int, ShiftTally] = field(default_factory=dict)


def _header_date(value: Any, *, column: int, layout: ScheduleLayout, month: int, year: int) -> Tuple[bool, Optional[date], str]:
    """Interpret one header cell: ``(is_day_column, date or None, label)``."""

    if value is None or isinstance(value, bool):
        return False, None, ""
    if isinstance(value, datetime):
        return True, value.date(), value.date().isoformat()
    if isinstance(value, date):
        return True, value, value.isoformat()

    number: Optional[float] = None
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return False, None, ""

    if number is None or number != number or not number.is_integer() or number < 1:
        return False, None, ""

    if number > 31:
        serial_day = spreadsheet_serial_to_date(number)
        return True, serial_day, serial_day.isoformat()

    # Day-number headers are positional: the first day column is the 1st of the month.
    day_number = column - layout.first_day_column + 1
    return True, safe_date(year, month, day_number), f"day {day_number}"


def resolve_day_columns(header: Sequence[Any], *, layout: ScheduleLayout, month: int, year: int) -> List[DayColumn]:
    columns: List[DayColumn] = []
    for column in range(layout.first_day_column, len(header)):
        is_day, day, label = _header_date(header[column], column=column, layout=layout, month=month, year=year)
        if is_day:
            columns.append(DayColumn(column=column, day=day, label=label))
    return columns


def _cell(row: Sequence[Any], column: int) -> Any:
    return row[column] if column < len(row) else None


def build_import_plan(
    rows: Sequence[Sequence[Any]],
    *,
    month: int,
    year: int,
    snapshot: ImportSnapshot,
    layout: ScheduleLayout | None = None,
) -> ImportPlan:
    """Turn a schedule grid into assignment drafts, row errors and per-employee tallies.

    Pure: nothing is written here. An employee appearing on several rows has
    one merged tally.
    """

    layout = layout or ScheduleLayout()
    plan = ImportPlan()
    if len(rows) <= layout.header_row:
        return plan

    day_columns = resolve_day_columns(rows[layout.header_row], layout=layout, month=month, year=year)

    for row in rows[layout.header_row + 1 :]:
        number = normalize_employee_number(_cell(row, layout.number_column))
        if not number:
            continue

        employee = snapshot.employees_by_number.get(number)
        if employee is None:
            plan.errors.append(RowError(number, "employee not found"))
            continue

        for col in day_columns:
            cell = classify_cell(_cell(row, col.column))
            if cell.kind in (CellKind.BLANK, CellKind.LEAVE):
                continue
            if cell.kind is CellKind.UNRECOGNIZED:
                plan.errors.append(RowError(number, f"unrecognized shift code '{cell.raw}' ({col.label})"))
                continue
            if col.day is None:
                plan.errors.append(RowError(number, f"{col.label} does not exist in {year}-{month:02d}"))
                continue

            plan.drafts.append(
                AssignmentDraft(
                    employee_id=employee.employee_id,
                    employee_number=number,
                    assigned_date=col.day,
                    shift_code=cell.shift_code,
                    shift_id=snapshot.shift_id_for(cell.shift_code),
                    status=AssignmentStatus.ASSIGNED,
                    notes=IMPORT_NOTE_TEMPLATE.format(code=cell.raw),
                )
            )
            plan.tallies.setdefault(employee.employee_id, ShiftTally()).add(cell.shift_code)

    return plan
