from __future__ import annotations

from datetime import date, datetime, time

import pytest

from presence_system.core.enums import ShiftCode
from presence_system.employees.model import Employee
from presence_system.schedules.importer import ImportSnapshot, build_import_plan
from presence_system.schedules.model import RowError, ScheduleLayout
from presence_system.shifts.model import Shift

EMPLOYEES = [
    Employee(employee_id=1, employee_number="001", first_name="Ayse", last_name="Kaya"),
    Employee(employee_id=2, employee_number="002", first_name="Mehmet", last_name="Demir"),
    Employee(employee_id=3, employee_number="7", first_name="Elif", last_name="Yilmaz"),
]
SHIFTS = [
    Shift(shift_id=10, shift_name="Morning", start_time=time(8, 0), end_time=time(16, 0)),
    Shift(shift_id=20, shift_name="Evening", start_time=time(16, 0), end_time=time(0, 0)),
]


def grid(header_days, *rows):
    """Three title rows, the day header, then employee rows."""
    return [
        ["Shift Schedule"],
        ["July"],
        [],
        ["No", "Name", *header_days],
        *[list(r) for r in rows],
    ]


@pytest.fixture
def snapshot():
    return ImportSnapshot.build(EMPLOYEES, SHIFTS)


def test_basic_month(snapshot):
    plan = build_import_plan(grid([1, 2, 3], ["001", "Ayse", "S", "S", "OF"]), month=7, year=2025, snapshot=snapshot)

    assert plan.errors == []
    assert [(d.assigned_date, d.shift_code, d.shift_id) for d in plan.drafts] == [
        (date(2025, 7, 1), ShiftCode.MORNING, 10),
        (date(2025, 7, 2), ShiftCode.MORNING, 10),
        (date(2025, 7, 3), ShiftCode.OFF, None),
    ]
    assert plan.drafts[0].notes == "Imported from spreadsheet (S)"
    assert plan.drafts[2].notes == "Imported from spreadsheet (OF)"
    assert plan.tallies[1].morning == 2
    assert plan.tallies[1].off == 1


def test_unknown_employee_is_one_error_and_other_rows_continue(snapshot):
    plan = build_import_plan(
        grid([1, 2], ["999", "Ghost", "S", "A"], ["002", "Mehmet", "A", "A"]),
        month=7,
        year=2025,
        snapshot=snapshot,
    )

    assert plan.errors == [RowError("999", "employee not found")]
    assert [d.employee_id for d in plan.drafts] == [2, 2]
    assert [d.shift_id for d in plan.drafts] == [20, 20]


def test_day_headers_map_by_position(snapshot):
    # Header labels are not read as day numbers: the first day column is the 1st.
    plan = build_import_plan(grid([5, 6], ["001", "Ayse", "S", "A"]), month=7, year=2025, snapshot=snapshot)

    assert [d.assigned_date for d in plan.drafts] == [date(2025, 7, 1), date(2025, 7, 2)]


def test_serial_and_date_headers(snapshot):
    plan = build_import_plan(
        grid([45474, datetime(2024, 7, 2), date(2024, 7, 3)], ["001", "Ayse", "S", "A", "Ç"]),
        month=12,
        year=2030,
        snapshot=snapshot,
    )

    assert [d.assigned_date for d in plan.drafts] == [date(2024, 7, 1), date(2024, 7, 2), date(2024, 7, 3)]
    assert plan.drafts[2].shift_code is ShiftCode.WORKING


def test_non_day_headers_are_ignored(snapshot):
    plan = build_import_plan(
        grid([1, "Total", 2], ["001", "Ayse", "S", "whatever", "A"]),
        month=7,
        year=2025,
        snapshot=snapshot,
    )

    assert plan.errors == []
    assert [d.shift_code for d in plan.drafts] == [ShiftCode.MORNING, ShiftCode.EVENING]


def test_day_missing_from_month(snapshot):
    header = list(range(1, 32))
    cells = [None] * 31
    cells[30] = "S"
    plan = build_import_plan(grid(header, ["001", "Ayse", *cells], ["002", "Mehmet"] + [None] * 31), month=6, year=2025, snapshot=snapshot)

    assert plan.drafts == []
    assert len(plan.errors) == 1
    assert plan.errors[0].employee_number == "001"
    assert "day 31" in plan.errors[0].reason


def test_leave_blank_and_unrecognized_cells(snapshot):
    plan = build_import_plan(
        grid([1, 2, 3, 4], ["001", "Ayse", "İzin", None, "X", "S"]),
        month=7,
        year=2025,
        snapshot=snapshot,
    )

    assert [d.assigned_date for d in plan.drafts] == [date(2025, 7, 4)]
    assert len(plan.errors) == 1
    assert plan.errors[0].employee_number == "001"
    assert "'X'" in plan.errors[0].reason


def test_numeric_employee_numbers_and_blank_rows(snapshot):
    plan = build_import_plan(
        grid([1], [7.0, "Elif", "S"], [None, "Notes row", "S"], ["", "", ""]),
        month=7,
        year=2025,
        snapshot=snapshot,
    )

    assert plan.errors == []
    assert [d.employee_id for d in plan.drafts] == [3]
    assert plan.drafts[0].employee_number == "7"


def test_short_rows_are_padded(snapshot):
    plan = build_import_plan(grid([1, 2, 3], ["001", "Ayse", "S"]), month=7, year=2025, snapshot=snapshot)

    assert len(plan.drafts) == 1


def test_repeated_employee_rows_share_one_tally(snapshot):
    plan = build_import_plan(
        grid([1, 2], ["001", "Ayse", "S", "S"], ["001", "Ayse again", "A", None]),
        month=7,
        year=2025,
        snapshot=snapshot,
    )

    assert list(plan.tallies) == [1]
    assert (plan.tallies[1].morning, plan.tallies[1].evening) == (2, 1)


def test_custom_layout(snapshot):
    rows = [["No", "Name", "Dept", 1, 2], ["001", "Ayse", "Ops", "A", "A"]]
    layout = ScheduleLayout(header_row=0, first_day_column=3)

    plan = build_import_plan(rows, month=7, year=2025, snapshot=snapshot, layout=layout)

    assert [d.assigned_date for d in plan.drafts] == [date(2025, 7, 1), date(2025, 7, 2)]


def test_sheet_without_header_row(snapshot):
    plan = build_import_plan([["only a title"]], month=7, year=2025, snapshot=snapshot)

    assert plan.drafts == [] and plan.errors == [] and plan.tallies == {}


def test_snapshot_matches_shift_names_first_match_wins():
    shifts = [
        Shift(shift_id=1, shift_name="Gece Nöbeti", start_time=time(0, 0), end_time=time(8, 0)),
        Shift(shift_id=2, shift_name="Sabah", start_time=time(8, 0), end_time=time(16, 0)),
        Shift(shift_id=3, shift_name="AKŞAM", start_time=time(16, 0), end_time=time(0, 0)),
        Shift(shift_id=4, shift_name="Morning B", start_time=time(9, 0), end_time=time(17, 0)),
    ]

    snap = ImportSnapshot.build([], shifts)

    assert snap.morning_shift_id == 2
    assert snap.evening_shift_id == 1


def test_snapshot_without_matching_shifts():
    snap = ImportSnapshot.build(EMPLOYEES, [Shift(shift_id=1, shift_name="Day", start_time=time(9, 0), end_time=time(17, 0))])

    assert snap.morning_shift_id is None
    assert snap.evening_shift_id is None


def test_snapshot_is_read_only_and_first_number_wins():
    duplicate = Employee(employee_id=9, employee_number="001", first_name="Other", last_name="Person")

    snap = ImportSnapshot.build([*EMPLOYEES, duplicate], SHIFTS)

    assert snap.employees_by_number["001"].employee_id == 1
    with pytest.raises(TypeError):
        snap.employees_by_number["003"] = duplicate
