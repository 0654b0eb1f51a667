from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AssignmentStatus, ShiftCode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AssignmentDraft, ShiftAssignment
from .repository import ShiftAssignmentRepository


class MySQLShiftAssignmentRepository(ShiftAssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, draft: AssignmentDraft) -> ShiftAssignment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_assignments(employee_id, shift_id, assigned_date, shift_code, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(draft.employee_id),
                    draft.shift_id,
                    draft.assigned_date,
                    draft.shift_code.value,
                    draft.status.value,
                    draft.notes,
                ),
            )
            assignment_id = int(cur.lastrowid)

        return ShiftAssignment(
            assignment_id=assignment_id,
            employee_id=draft.employee_id,
            shift_id=draft.shift_id,
            assigned_date=draft.assigned_date,
            shift_code=draft.shift_code,
            status=draft.status,
            notes=draft.notes,
        )

    def list_range(self, *, start: date, end: date, employee_id: Optional[int] = None) -> Sequence[ShiftAssignment]:
        clauses = ["assigned_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT assignment_id, employee_id, shift_id, assigned_date, shift_code, status, notes
                FROM shift_assignments
                WHERE {where}
                ORDER BY assigned_date ASC, employee_id ASC, assignment_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                ShiftAssignment(
                    assignment_id=int(r["assignment_id"]),
                    employee_id=int(r["employee_id"]),
                    shift_id=r.get("shift_id"),
                    assigned_date=r["assigned_date"],
                    shift_code=ShiftCode(r["shift_code"]),
                    status=AssignmentStatus(r["status"]),
                    notes=r.get("notes"),
                )
                for r in rows
            ]
