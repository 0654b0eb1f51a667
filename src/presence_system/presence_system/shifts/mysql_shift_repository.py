from __future__ import annotations

from typing import Any, Dict, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import Shift
from .repository import ShiftRepository


def _to_shift(r: Dict[str, Any]) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        branch_id=r.get("branch_id"),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, shift_name, start_time, end_time, branch_id, is_active
                FROM shifts
                ORDER BY shift_id
                """
            )
            return [_to_shift(r) for r in fetchall(cur)]
