from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AccessCode
from .repository import AccessCodeRepository

_COLUMNS = "code_id, code, screen_id, branch_id, expires_at, is_active, created_at"


def _to_code(r: Dict[str, Any]) -> AccessCode:
    return AccessCode(
        code_id=int(r["code_id"]),
        code=r["code"],
        screen_id=r.get("screen_id"),
        branch_id=r.get("branch_id"),
        expires_at=r["expires_at"],
        is_active=bool(r["is_active"]),
        created_at=r.get("created_at"),
    )


class MySQLAccessCodeRepository(AccessCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, code: str) -> Optional[AccessCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM access_codes WHERE code=%s ORDER BY code_id DESC LIMIT 1",
                (code,),
            )
            r = fetchone(cur)
            return _to_code(r) if r else None

    def get_active_for_screen(self, screen_id: str, *, now: datetime) -> Optional[AccessCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM access_codes
                WHERE screen_id=%s AND is_active=1 AND expires_at >= %s
                ORDER BY code_id DESC
                LIMIT 1
                """,
                (screen_id, now),
            )
            r = fetchone(cur)
            return _to_code(r) if r else None

    def list_active(self, *, now: datetime, screen_id: Optional[str] = None, manual_only: bool = False) -> Sequence[AccessCode]:
        clauses = ["is_active=1", "expires_at >= %s"]
        params: list[object] = [now]
        if screen_id is not None:
            clauses.append("screen_id=%s")
            params.append(screen_id)
        elif manual_only:
            clauses.append("screen_id IS NULL")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM access_codes WHERE {' AND '.join(clauses)} ORDER BY code_id DESC",
                tuple(params),
            )
            return [_to_code(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        code: str,
        screen_id: Optional[str],
        branch_id: Optional[int],
        expires_at: datetime,
        created_at: datetime,
    ) -> AccessCode:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO access_codes(code, screen_id, branch_id, expires_at, is_active, created_at)
                VALUES(%s,%s,%s,%s,1,%s)
                """,
                (code, screen_id, branch_id, expires_at, created_at),
            )
            code_id = int(cur.lastrowid)
        return AccessCode(
            code_id=code_id,
            code=code,
            screen_id=screen_id,
            branch_id=branch_id,
            expires_at=expires_at,
            is_active=True,
            created_at=created_at,
        )

    def rotate_for_screen(
        self,
        *,
        screen_id: str,
        code: str,
        branch_id: Optional[int],
        expires_at: datetime,
        created_at: datetime,
    ) -> AccessCode:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row locks on the screen's active codes serialize concurrent rotations.
            cur.execute(
                "SELECT code_id FROM access_codes WHERE screen_id=%s AND is_active=1 FOR UPDATE",
                (screen_id,),
            )
            fetchall(cur)
            cur.execute(
                "UPDATE access_codes SET is_active=0 WHERE screen_id=%s AND is_active=1",
                (screen_id,),
            )
            cur.execute(
                """
                INSERT INTO access_codes(code, screen_id, branch_id, expires_at, is_active, created_at)
                VALUES(%s,%s,%s,%s,1,%s)
                """,
                (code, screen_id, branch_id, expires_at, created_at),
            )
            code_id = int(cur.lastrowid)
        return AccessCode(
            code_id=code_id,
            code=code,
            screen_id=screen_id,
            branch_id=branch_id,
            expires_at=expires_at,
            is_active=True,
            created_at=created_at,
        )

    def deactivate_if_active(self, code_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE access_codes SET is_active=0 WHERE code_id=%s AND is_active=1",
                (int(code_id),),
            )
            return cur.rowcount > 0

    def deactivate_expired(self, *, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE access_codes SET is_active=0 WHERE is_active=1 AND expires_at < %s",
                (now,),
            )
            return int(cur.rowcount)

    def deactivate_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE access_codes SET is_active=0 WHERE is_active=1")
            return int(cur.rowcount)
