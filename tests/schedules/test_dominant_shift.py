from __future__ import annotations

import logging

import pytest

from presence_system.schedules.dominant import DominantShiftResolver, resolve_dominant_shift
from presence_system.schedules.importer import ImportSnapshot, ShiftTally


@pytest.mark.parametrize(
    "tally, expected",
    [
        (ShiftTally(morning=3, evening=1), 10),
        (ShiftTally(morning=1, evening=4), 20),
        (ShiftTally(morning=2, evening=2), None),
        (ShiftTally(off=5, working=3), None),
        (ShiftTally(), None),
    ],
)
def test_resolve(tally, expected):
    assert resolve_dominant_shift(tally, morning_shift_id=10, evening_shift_id=20) == expected


def test_missing_catalog_entry_means_no_update():
    assert resolve_dominant_shift(ShiftTally(morning=3), morning_shift_id=None, evening_shift_id=20) is None


def test_resolver_applies_updates_and_survives_storage_errors(repos, caplog):
    snapshot = ImportSnapshot.build(repos.employees.list_all(), repos.shifts.list_all())
    resolver = DominantShiftResolver(repos.employees)

    assert resolver.apply({1: ShiftTally(morning=2), 2: ShiftTally(off=3)}, snapshot) == 1
    assert repos.employees.updates == [(1, 1)]

    repos.employees.fail_updates = True
    with caplog.at_level(logging.ERROR):
        assert resolver.apply({2: ShiftTally(evening=1)}, snapshot) == 0
    assert "Could not update default shift of employee 2" in caplog.text
