from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Optional, Sequence

from ..common.validators import require_month_year
from ..core.exceptions import StorageError, ValidationError
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftRepository
from .dominant import DominantShiftResolver
from .importer import ImportSnapshot, build_import_plan
from .model import ImportResult, RowError, ScheduleLayout, ShiftAssignment
from .repository import ShiftAssignmentRepository
from .spreadsheet import read_schedule_rows
from .template import build_template

logger = logging.getLogger(__name__)


class ScheduleImportService:
    """Bulk-creates shift assignments from a monthly schedule sheet.

    Rows are resolved against a snapshot of the directory and catalog taken
    once per call. Drafts are written one by one; a failed write becomes a
    row error and the rest carry on. Re-importing the same sheet appends
    a second set of assignments.
    """

    def __init__(
        self,
        assignments: ShiftAssignmentRepository,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        *,
        layout: ScheduleLayout | None = None,
        resolver: DominantShiftResolver | None = None,
    ):
        self._assignments = assignments
        self._employees = employees
        self._shifts = shifts
        self._layout = layout or ScheduleLayout()
        self._resolver = resolver or DominantShiftResolver(employees)

    @property
    def layout(self) -> ScheduleLayout:
        return self._layout

    def import_schedule(self, content: bytes, *, filename: str, month: Any, year: Any) -> ImportResult:
        month, year = require_month_year(month, year)
        rows = read_schedule_rows(content, filename=filename)
        logger.info("Importing schedule %r for %s-%02d (%s rows)", filename, year, month, len(rows))
        return self.import_rows(rows, month=month, year=year)

    def import_rows(self, rows: Sequence[Sequence[Any]], *, month: int, year: int) -> ImportResult:
        snapshot = ImportSnapshot.build(self._employees.list_all(), self._shifts.list_all())
        plan = build_import_plan(rows, month=month, year=year, snapshot=snapshot, layout=self._layout)

        errors: List[RowError] = list(plan.errors)
        imported = 0
        for draft in plan.drafts:
            try:
                self._assignments.create(draft)
                imported += 1
            except StorageError as e:
                logger.warning("Assignment for %s on %s failed: %s", draft.employee_number, draft.assigned_date, e)
                errors.append(RowError(draft.employee_number, str(e)))

        updated = self._resolver.apply(plan.tallies, snapshot)

        result = ImportResult(imported_count=imported, errors=tuple(errors))
        logger.info(
            "Schedule import done: %s imported, %s errors, %s default shifts updated",
            result.imported_count,
            result.error_count,
            updated,
        )
        return result

    def build_template(self, month: Any, year: Any) -> bytes:
        month, year = require_month_year(month, year)
        return build_template(month, year, layout=self._layout)

    def list_assignments(self, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[ShiftAssignment]:
        if end < start:
            raise ValidationError("end must not be before start")
        return self._assignments.list_range(start=start, end=end, employee_id=employee_id)
