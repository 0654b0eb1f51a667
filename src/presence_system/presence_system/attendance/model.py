from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one presence record produced by a successful code scan."""

    event_id: int
    employee_id: int
    access_code_id: Optional[int]
    kiosk_id: Optional[int]
    event_date: date
    check_in_time: datetime
    location: str
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_out_time: Optional[datetime] = None
    notes: Optional[str] = None
