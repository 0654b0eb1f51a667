from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..core.constants import LEAVE_MARKERS
from ..core.enums import ShiftCode

SHIFT_CODES = {
    "S": ShiftCode.MORNING,
    "A": ShiftCode.EVENING,
    "OF": ShiftCode.OFF,
    "Ç": ShiftCode.WORKING,
}


class CellKind(str, Enum):
    BLANK = "blank"
    SHIFT = "shift"
    LEAVE = "leave"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ScheduleCell:
    kind: CellKind
    raw: str = ""
    shift_code: Optional[ShiftCode] = None


def classify_cell(value: Any) -> ScheduleCell:
    """Map a raw day cell onto the schedule vocabulary.

    Leave markers match as case-insensitive substrings ("Yıllık izin" is leave);
    shift codes must match exactly after trimming and upper-casing.
    """

    if value is None:
        return ScheduleCell(CellKind.BLANK)

    raw = str(value).strip()
    if not raw:
        return ScheduleCell(CellKind.BLANK)

    # "ç".upper() is "Ç", so lower-case sheets still match.
    code = SHIFT_CODES.get(raw.upper())
    if code is not None:
        return ScheduleCell(CellKind.SHIFT, raw=raw.upper(), shift_code=code)

    # "İ".lower() leaves a combining dot behind ("i\u0307"), which would hide "izin".
    lowered = raw.lower().replace("\u0307", "")
    if any(marker in lowered for marker in LEAVE_MARKERS):
        return ScheduleCell(CellKind.LEAVE, raw=raw)

    return ScheduleCell(CellKind.UNRECOGNIZED, raw=raw)
