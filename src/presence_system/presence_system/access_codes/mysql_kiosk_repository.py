from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Kiosk
from .repository import KioskRepository

_COLUMNS = "kiosk_id, screen_id, branch_id, display_name, active, last_activity_at"


def _to_kiosk(r: Dict[str, Any]) -> Kiosk:
    return Kiosk(
        kiosk_id=int(r["kiosk_id"]),
        screen_id=r["screen_id"],
        branch_id=r.get("branch_id"),
        display_name=r["display_name"],
        active=bool(r.get("active", True)),
        last_activity_at=r.get("last_activity_at"),
    )


class MySQLKioskRepository(KioskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_screen_id(self, screen_id: str) -> Optional[Kiosk]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM kiosks WHERE screen_id=%s", (screen_id,))
            r = fetchone(cur)
            return _to_kiosk(r) if r else None

    def create(self, *, screen_id: str, branch_id: Optional[int], display_name: str, now: datetime) -> Kiosk:
        with db_cursor(self._conn_factory) as (_, cur):
            # Two first polls racing on one screen id both end up with the same row.
            cur.execute(
                """
                INSERT INTO kiosks(screen_id, branch_id, display_name, active, last_activity_at)
                VALUES(%s,%s,%s,1,%s)
                ON DUPLICATE KEY UPDATE kiosk_id=LAST_INSERT_ID(kiosk_id)
                """,
                (screen_id, branch_id, display_name, now),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM kiosks WHERE kiosk_id=%s", (int(cur.lastrowid),))
            return _to_kiosk(fetchone(cur))

    def touch_activity(self, screen_id: str, *, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE kiosks SET last_activity_at=%s WHERE screen_id=%s", (at, screen_id))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Kiosk]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM kiosks ORDER BY kiosk_id")
            return [_to_kiosk(r) for r in fetchall(cur)]
