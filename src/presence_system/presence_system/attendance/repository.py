from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEvent


class AttendanceRepository(Protocol):
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
        raise NotImplementedError

    def list_for_date(self, event_date: date) -> Sequence[AttendanceEvent]:
        raise NotImplementedError
