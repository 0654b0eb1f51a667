from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from types import SimpleNamespace
from typing import Callable, Optional

import pytest

from presence_system.access_codes.model import AccessCode, Kiosk
from presence_system.attendance.model import AttendanceEvent
from presence_system.branches.model import Branch
from presence_system.container import wire_services
from presence_system.core.exceptions import StorageError
from presence_system.employees.model import Employee
from presence_system.schedules.model import AssignmentDraft, ShiftAssignment
from presence_system.shifts.model import Shift


class InMemoryAccessCodes:
    def __init__(self):
        self.rows: list[AccessCode] = []
        self.fail_rotation = False

    def _next_id(self) -> int:
        return len(self.rows) + 1

    def _replace(self, code_id: int, **changes) -> None:
        self.rows = [replace(r, **changes) if r.code_id == code_id else r for r in self.rows]

    def get_by_code(self, code: str) -> Optional[AccessCode]:
        matches = [r for r in self.rows if r.code == code]
        return matches[-1] if matches else None

    def get_active_for_screen(self, screen_id: str, *, now: datetime) -> Optional[AccessCode]:
        matches = [r for r in self.rows if r.screen_id == screen_id and r.is_active and r.expires_at >= now]
        return matches[-1] if matches else None

    def list_active(self, *, now: datetime, screen_id=None, manual_only: bool = False):
        out = [r for r in self.rows if r.is_active and r.expires_at >= now]
        if screen_id is not None:
            out = [r for r in out if r.screen_id == screen_id]
        elif manual_only:
            out = [r for r in out if r.screen_id is None]
        return list(reversed(out))

    def create(self, *, code, screen_id, branch_id, expires_at, created_at) -> AccessCode:
        row = AccessCode(
            code_id=self._next_id(),
            code=code,
            screen_id=screen_id,
            branch_id=branch_id,
            expires_at=expires_at,
            is_active=True,
            created_at=created_at,
        )
        self.rows.append(row)
        return row

    def rotate_for_screen(self, *, screen_id, code, branch_id, expires_at, created_at) -> AccessCode:
        if self.fail_rotation:
            raise StorageError("Database operation failed: rotation")
        for r in list(self.rows):
            if r.screen_id == screen_id and r.is_active:
                self._replace(r.code_id, is_active=False)
        return self.create(code=code, screen_id=screen_id, branch_id=branch_id, expires_at=expires_at, created_at=created_at)

    def deactivate_if_active(self, code_id: int) -> bool:
        current = next((r for r in self.rows if r.code_id == code_id), None)
        if current is None or not current.is_active:
            return False
        self._replace(code_id, is_active=False)
        return True

    def deactivate_expired(self, *, now: datetime) -> int:
        expired = [r for r in self.rows if r.is_active and r.expires_at < now]
        for r in expired:
            self._replace(r.code_id, is_active=False)
        return len(expired)

    def deactivate_all(self) -> int:
        active = [r for r in self.rows if r.is_active]
        for r in active:
            self._replace(r.code_id, is_active=False)
        return len(active)

    def active_for(self, screen_id: str) -> list[AccessCode]:
        return [r for r in self.rows if r.screen_id == screen_id and r.is_active]


class InMemoryKiosks:
    def __init__(self, kiosks=()):
        self.by_screen: dict[str, Kiosk] = {k.screen_id: k for k in kiosks}

    def get_by_screen_id(self, screen_id: str) -> Optional[Kiosk]:
        return self.by_screen.get(screen_id)

    def create(self, *, screen_id, branch_id, display_name, now) -> Kiosk:
        if screen_id not in self.by_screen:
            self.by_screen[screen_id] = Kiosk(
                kiosk_id=len(self.by_screen) + 1,
                screen_id=screen_id,
                branch_id=branch_id,
                display_name=display_name,
                last_activity_at=now,
            )
        return self.by_screen[screen_id]

    def touch_activity(self, screen_id: str, *, at: datetime) -> bool:
        kiosk = self.by_screen.get(screen_id)
        if kiosk is None:
            return False
        self.by_screen[screen_id] = replace(kiosk, last_activity_at=at)
        return True

    def list_all(self):
        return sorted(self.by_screen.values(), key=lambda k: k.kiosk_id)


class InMemoryBranches:
    def __init__(self, branches=()):
        self.by_id = {b.branch_id: b for b in branches}

    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        return self.by_id.get(branch_id)


class InMemoryEmployees:
    def __init__(self, employees=()):
        self.by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self.updates: list[tuple[int, int]] = []
        self.fail_updates = False

    def list_all(self):
        return list(self.by_id.values())

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def update_default_shift(self, employee_id: int, shift_id: int) -> bool:
        if self.fail_updates:
            raise StorageError("Database operation failed: update")
        self.updates.append((employee_id, shift_id))
        employee = self.by_id.get(employee_id)
        if employee is None:
            return False
        self.by_id[employee_id] = replace(employee, default_shift_id=shift_id)
        return True


class InMemoryShifts:
    def __init__(self, shifts=()):
        self.shifts = list(shifts)

    def list_all(self):
        return list(self.shifts)


class InMemoryAttendance:
    def __init__(self):
        self.events: list[AttendanceEvent] = []

    def create(self, *, employee_id, access_code_id, kiosk_id, event_date, check_in_time, location, status, notes=None):
        event = AttendanceEvent(
            event_id=len(self.events) + 1,
            employee_id=employee_id,
            access_code_id=access_code_id,
            kiosk_id=kiosk_id,
            event_date=event_date,
            check_in_time=check_in_time,
            location=location,
            status=status,
            notes=notes,
        )
        self.events.append(event)
        return event

    def list_for_date(self, event_date: date):
        return [e for e in self.events if e.event_date == event_date]


class InMemoryAssignments:
    def __init__(self):
        self.rows: list[ShiftAssignment] = []
        self.fail_when: Callable[[AssignmentDraft], bool] = lambda draft: False

    def create(self, draft: AssignmentDraft) -> ShiftAssignment:
        if self.fail_when(draft):
            raise StorageError(f"Database operation failed: {draft.assigned_date}")
        row = ShiftAssignment(
            assignment_id=len(self.rows) + 1,
            employee_id=draft.employee_id,
            shift_id=draft.shift_id,
            assigned_date=draft.assigned_date,
            shift_code=draft.shift_code,
            status=draft.status,
            notes=draft.notes,
        )
        self.rows.append(row)
        return row

    def list_range(self, *, start: date, end: date, employee_id=None):
        return [
            r
            for r in self.rows
            if start <= r.assigned_date <= end and (employee_id is None or r.employee_id == employee_id)
        ]


MORNING = Shift(shift_id=1, shift_name="Sabah Vardiyası", start_time=time(8, 0), end_time=time(16, 0), branch_id=1)
EVENING = Shift(shift_id=2, shift_name="Akşam Vardiyası", start_time=time(16, 0), end_time=time(0, 0), branch_id=1)
NIGHT = Shift(shift_id=3, shift_name="Gece", start_time=time(0, 0), end_time=time(8, 0), branch_id=1)


@pytest.fixture
def repos():
    return SimpleNamespace(
        branches=InMemoryBranches([Branch(branch_id=1, name="Main Branch"), Branch(branch_id=2, name="Harbour Office")]),
        employees=InMemoryEmployees(
            [
                Employee(employee_id=1, employee_number="001", first_name="Ayse", last_name="Kaya", branch_id=1, default_shift_id=2),
                Employee(employee_id=2, employee_number="002", first_name="Mehmet", last_name="Demir", branch_id=1),
                Employee(employee_id=3, employee_number="7", first_name="Elif", last_name="Yilmaz", branch_id=1),
            ]
        ),
        shifts=InMemoryShifts([MORNING, EVENING, NIGHT]),
        access_codes=InMemoryAccessCodes(),
        kiosks=InMemoryKiosks(),
        attendance=InMemoryAttendance(),
        assignments=InMemoryAssignments(),
    )


@pytest.fixture
def container(repos):
    return wire_services(
        branches_repo=repos.branches,
        employees_repo=repos.employees,
        shifts_repo=repos.shifts,
        access_codes_repo=repos.access_codes,
        kiosks_repo=repos.kiosks,
        attendance_repo=repos.attendance,
        assignments_repo=repos.assignments,
    )


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from presence_system.main import create_app

    app = create_app(container)
    return app.test_client()
