from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence

from ..access_codes.service import AccessCodeService
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import MANUAL_LOCATION
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, StorageError
from ..employees.repository import EmployeeRepository
from .model import AttendanceEvent
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        access_codes: AccessCodeService,
        employees: EmployeeRepository | None = None,
    ):
        self._attendance = attendance
        self._access_codes = access_codes
        self._employees = employees

    def record_scan(self, code_value: str, employee_id: int, *, now: datetime | None = None) -> AttendanceEvent:
        """Turn a scanned access code into one presence event.

        The code is claimed before the event is written, so two scans racing
        on the same code cannot both succeed. Kiosk codes are rotated
        afterwards; a failed rotation does not undo the event.
        """

        now = now or datetime.now()
        employee_id = require_positive_int(employee_id, "employeeId")
        code_value = require_non_empty(code_value, "code")

        if self._employees is not None and self._employees.get_by_id(employee_id) is None:
            raise NotFoundError("Employee not found")

        validated = self._access_codes.validate(code_value, now=now)
        code = validated.code
        kiosk = validated.kiosk

        if not self._access_codes.consume(code.code_id):
            raise NotFoundError("Access code is no longer active")

        if kiosk is not None:
            location = kiosk.display_name
            notes = f"Kiosk {kiosk.display_name} ({kiosk.screen_id})"
        else:
            location = MANUAL_LOCATION
            notes = "Manual access code check-in"

        event = self._attendance.create(
            employee_id=employee_id,
            access_code_id=code.code_id,
            kiosk_id=kiosk.kiosk_id if kiosk else None,
            event_date=now.date(),
            check_in_time=now,
            location=location,
            status=AttendanceStatus.PRESENT,
            notes=notes,
        )
        logger.info("Recorded presence for employee %s at %s", employee_id, location)

        if code.screen_id:
            try:
                self._access_codes.create_for_kiosk(code.screen_id, now=now)
            except StorageError:
                logger.exception("Could not rotate code for kiosk %s after scan", code.screen_id)

        return event

    def list_for_date(self, day: date) -> Sequence[AttendanceEvent]:
        return self._attendance.list_for_date(day)
