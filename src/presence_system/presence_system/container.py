from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .access_codes.mysql_access_code_repository import MySQLAccessCodeRepository
from .access_codes.mysql_kiosk_repository import MySQLKioskRepository
from .access_codes.repository import AccessCodeRepository, KioskRepository
from .access_codes.service import AccessCodeService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .branches.mysql_branch_repository import MySQLBranchRepository
from .branches.repository import BranchRepository
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .schedules.dominant import DominantShiftResolver
from .schedules.model import ScheduleLayout
from .schedules.mysql_schedule_repository import MySQLShiftAssignmentRepository
from .schedules.repository import ShiftAssignmentRepository
from .schedules.service import ScheduleImportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository


@dataclass(frozen=True)
class Container:
    branches_repo: BranchRepository
    employees_repo: EmployeeRepository
    shifts_repo: ShiftRepository
    access_codes_repo: AccessCodeRepository
    kiosks_repo: KioskRepository
    attendance_repo: AttendanceRepository
    assignments_repo: ShiftAssignmentRepository

    access_code_service: AccessCodeService
    attendance_service: AttendanceService
    schedule_import_service: ScheduleImportService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    branches_repo: BranchRepository,
    employees_repo: EmployeeRepository,
    shifts_repo: ShiftRepository,
    access_codes_repo: AccessCodeRepository,
    kiosks_repo: KioskRepository,
    attendance_repo: AttendanceRepository,
    assignments_repo: ShiftAssignmentRepository,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services over any set of repositories (MySQL in the app, in-memory fakes in tests)."""

    def setting(name: str, default):
        return getattr(settings, name, default) if settings is not None else default

    access_code_service = AccessCodeService(
        access_codes_repo,
        kiosks_repo,
        branches_repo,
        ttl_seconds=setting("ACCESS_CODE_TTL_SECONDS", constants.DEFAULT_CODE_TTL_SECONDS),
        code_length=setting("ACCESS_CODE_LENGTH", constants.DEFAULT_CODE_LENGTH),
        manual_ttl_minutes=setting("MANUAL_CODE_TTL_MINUTES", constants.DEFAULT_MANUAL_CODE_TTL_MINUTES),
        default_branch_id=setting("DEFAULT_BRANCH_ID", 1),
        default_branch_name=setting("DEFAULT_BRANCH_NAME", constants.DEFAULT_BRANCH_NAME),
    )
    attendance_service = AttendanceService(attendance_repo, access_code_service, employees_repo)

    layout = ScheduleLayout(
        header_row=setting("SCHEDULE_HEADER_ROW", constants.DEFAULT_SCHEDULE_HEADER_ROW),
        first_day_column=setting("SCHEDULE_FIRST_DAY_COLUMN", constants.DEFAULT_SCHEDULE_FIRST_DAY_COLUMN),
    )
    schedule_import_service = ScheduleImportService(
        assignments_repo,
        employees_repo,
        shifts_repo,
        layout=layout,
        resolver=DominantShiftResolver(employees_repo),
    )

    return Container(
        branches_repo=branches_repo,
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        access_codes_repo=access_codes_repo,
        kiosks_repo=kiosks_repo,
        attendance_repo=attendance_repo,
        assignments_repo=assignments_repo,
        access_code_service=access_code_service,
        attendance_service=attendance_service,
        schedule_import_service=schedule_import_service,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        branches_repo=MySQLBranchRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        access_codes_repo=MySQLAccessCodeRepository(conn),
        kiosks_repo=MySQLKioskRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        assignments_repo=MySQLShiftAssignmentRepository(conn),
        settings=settings,
        conn=conn,
    )
