from __future__ import annotations

import pytest

from presence_system.core.enums import ShiftCode
from presence_system.schedules.codes import CellKind, classify_cell


@pytest.mark.parametrize(
    "raw, code",
    [
        ("S", ShiftCode.MORNING),
        (" s ", ShiftCode.MORNING),
        ("A", ShiftCode.EVENING),
        ("OF", ShiftCode.OFF),
        ("of", ShiftCode.OFF),
        ("Ç", ShiftCode.WORKING),
        ("ç", ShiftCode.WORKING),
    ],
)
def test_shift_codes(raw, code):
    cell = classify_cell(raw)

    assert cell.kind is CellKind.SHIFT
    assert cell.shift_code is code


@pytest.mark.parametrize("raw", ["İzin", "Yıllık izin", "RAPOR", "yok", "Annual leave", "sick report", "Absent"])
def test_leave_markers(raw):
    assert classify_cell(raw).kind is CellKind.LEAVE


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_blank(raw):
    assert classify_cell(raw).kind is CellKind.BLANK


@pytest.mark.parametrize("raw", ["X", "SA", "C", 5, "morning"])
def test_unrecognized(raw):
    cell = classify_cell(raw)

    assert cell.kind is CellKind.UNRECOGNIZED
    assert cell.raw == str(raw)
