from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEvent
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        access_code_id: Optional[int],
        kiosk_id: Optional[int],
        event_date: date,
        check_in_time: datetime,
        location: str,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> AttendanceEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(
                    employee_id, access_code_id, kiosk_id, event_date, check_in_time, location, status, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (employee_id, access_code_id, kiosk_id, event_date, check_in_time, location, status.value, notes),
            )
            event_id = int(cur.lastrowid)

        return AttendanceEvent(
            event_id=event_id,
            employee_id=employee_id,
            access_code_id=access_code_id,
            kiosk_id=kiosk_id,
            event_date=event_date,
            check_in_time=check_in_time,
            location=location,
            status=status,
            notes=notes,
        )

    def list_for_date(self, event_date: date) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, employee_id, access_code_id, kiosk_id, event_date,
                       check_in_time, check_out_time, location, status, notes
                FROM attendance_events
                WHERE event_date=%s
                ORDER BY check_in_time ASC, event_id ASC
                """,
                (event_date,),
            )
            rows = fetchall(cur)
            return [
                AttendanceEvent(
                    event_id=int(r["event_id"]),
                    employee_id=int(r["employee_id"]),
                    access_code_id=r.get("access_code_id"),
                    kiosk_id=r.get("kiosk_id"),
                    event_date=r["event_date"],
                    check_in_time=r["check_in_time"],
                    check_out_time=r.get("check_out_time"),
                    location=r["location"],
                    status=AttendanceStatus(r["status"]),
                    notes=r.get("notes"),
                )
                for r in rows
            ]
