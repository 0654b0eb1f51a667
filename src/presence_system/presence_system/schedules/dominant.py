from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..core.exceptions import StorageError
from ..employees.repository import EmployeeRepository
from .importer import ImportSnapshot, ShiftTally

logger = logging.getLogger(__name__)


def resolve_dominant_shift(tally: ShiftTally, *, morning_shift_id: Optional[int], evening_shift_id: Optional[int]) -> Optional[int]:
    """Strict majority between morning and evening wins; ties and off/working-only months keep the current default."""

    if tally.morning > tally.evening and tally.morning > 0:
        return morning_shift_id
    if tally.evening > tally.morning and tally.evening > 0:
        return evening_shift_id
    return None


class DominantShiftResolver:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def apply(self, tallies: Mapping[int, ShiftTally], snapshot: ImportSnapshot) -> int:
        """Update each employee's default shift from their tally. Returns how many were updated."""

        updated = 0
        for employee_id, tally in tallies.items():
            shift_id = resolve_dominant_shift(
                tally,
                morning_shift_id=snapshot.morning_shift_id,
                evening_shift_id=snapshot.evening_shift_id,
            )
            if shift_id is None:
                continue
            try:
                if self._employees.update_default_shift(employee_id, shift_id):
                    updated += 1
            except StorageError:
                logger.exception("Could not update default shift of employee %s", employee_id)
        return updated
