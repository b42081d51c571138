"""
Name: PostgreSQL Repository Integration Tests

Responsibilities:
  - Verify the Postgres repositories against the migrated schema
  - Storage constraints surface as ConstraintViolationError with their names
  - Live-record uniqueness for attendance honours soft delete
  - Conditional writes: exit once, no writes on deleted rows, blocked tombstones

Notes:
  - Requires running PostgreSQL instance
  - Mark with @pytest.mark.integration

Setup:
  RUN_INTEGRATION=1 DATABASE_URL=postgresql://... pytest -m integration
"""

import os

import pytest

# Skip BEFORE importing hr_api.* repositories to avoid touching the pool during collection
if os.getenv("RUN_INTEGRATION") != "1":
    pytest.skip(
        "Set RUN_INTEGRATION=1 to run integration tests", allow_module_level=True
    )

from datetime import date, time
from decimal import Decimal
from uuid import uuid4

from hr_api.crosscutting.exceptions import ConstraintViolationError
from hr_api.crosscutting.pagination import PageRequest
from hr_api.domain.entities import Attendance, Camp, Department, Position
from hr_api.domain.repositories import AttendanceFilter, UserFilter
from hr_api.identity.users import User, UserRole, UserStatus
from hr_api.infrastructure.repositories import (
    PostgresAttendanceRepository,
    PostgresCampRepository,
    PostgresDepartmentRepository,
    PostgresPositionRepository,
    PostgresUserRepository,
)

pytestmark = pytest.mark.integration

DAY = date(2024, 3, 11)


@pytest.fixture
def users():
    return PostgresUserRepository()


@pytest.fixture
def attendances():
    return PostgresAttendanceRepository()


def _user(users, *, name="Ana Pérez", email=None, role=UserRole.EMPLOYEE, **extra):
    return users.create_user(
        User(
            id=uuid4(),
            name=name,
            email=email or f"user-{uuid4().hex[:8]}@example.com",
            password_hash="test-hash",
            role=role,
            **extra,
        )
    )


class TestUsers:
    def test_create_and_lookup_by_email(self, users):
        created = _user(users, email="ana@example.com")

        found = users.get_user_by_email("ana@example.com")

        assert found.id == created.id
        assert found.created_at is not None
        assert users.ping() is True

    def test_duplicate_email_violates_unique(self, users):
        _user(users, email="dup@example.com")

        with pytest.raises(ConstraintViolationError) as exc_info:
            _user(users, email="dup@example.com")

        assert exc_info.value.is_unique
        assert exc_info.value.constraint == "uq_users_email"

    def test_search_is_case_insensitive_and_escapes_wildcards(self, users):
        _user(users, name="Ana Pérez")
        _user(users, name="100% Real")

        by_name = users.list_users(UserFilter(search="pérez"), PageRequest())
        literal = users.list_users(UserFilter(search="100%"), PageRequest())

        assert [u.name for u in by_name.items] == ["Ana Pérez"]
        assert [u.name for u in literal.items] == ["100% Real"]


class TestAttendances:
    def test_live_record_unique_per_day(self, users, attendances):
        employee = _user(users)
        attendances.create_attendance(
            Attendance(id=uuid4(), employee_id=employee.id, date=DAY, entry_time=time(8))
        )

        with pytest.raises(ConstraintViolationError) as exc_info:
            attendances.create_attendance(
                Attendance(id=uuid4(), employee_id=employee.id, date=DAY)
            )

        assert exc_info.value.constraint == "uq_attendances_employee_date_live"

    def test_deleted_record_frees_the_day(self, users, attendances):
        employee = _user(users)
        first = attendances.create_attendance(
            Attendance(id=uuid4(), employee_id=employee.id, date=DAY)
        )
        assert attendances.soft_delete_attendance(first.id) is not None

        assert not attendances.exists_live_for_day(employee.id, DAY)
        second = attendances.create_attendance(
            Attendance(id=uuid4(), employee_id=employee.id, date=DAY)
        )

        assert second.id != first.id
        assert attendances.get_attendance(first.id) is None
        assert attendances.get_attendance(first.id, include_deleted=True).is_deleted

    def test_unknown_employee_violates_foreign_key(self, attendances):
        with pytest.raises(ConstraintViolationError) as exc_info:
            attendances.create_attendance(
                Attendance(id=uuid4(), employee_id=uuid4(), date=DAY)
            )

        assert exc_info.value.is_foreign_key

    def test_exit_is_written_once(self, users, attendances):
        employee = _user(users)
        record = attendances.create_attendance(
            Attendance(id=uuid4(), employee_id=employee.id, date=DAY)
        )

        assert attendances.set_exit_time(record.id, time(17)).exit_time == time(17)
        assert attendances.set_exit_time(record.id, time(18)) is None
        assert attendances.get_attendance(record.id).exit_time == time(17)

    def test_deleted_record_rejects_exit_and_update(self, users, attendances):
        employee = _user(users)
        record = attendances.create_attendance(
            Attendance(id=uuid4(), employee_id=employee.id, date=DAY)
        )
        assert attendances.soft_delete_attendance(record.id) is not None

        assert attendances.set_exit_time(record.id, time(17)) is None
        record.observations = "tarde"
        assert attendances.update_attendance(record) is None
        assert attendances.soft_delete_attendance(record.id) is None
        stored = attendances.get_attendance(record.id, include_deleted=True)
        assert stored.exit_time is None
        assert stored.observations is None

    def test_list_joins_employee_and_orders_by_date(self, users, attendances):
        employee = _user(users, name="Ana Pérez")
        for day in (date(2024, 3, 10), date(2024, 3, 12), date(2024, 3, 11)):
            attendances.create_attendance(
                Attendance(id=uuid4(), employee_id=employee.id, date=day)
            )

        page = attendances.list_attendances(
            AttendanceFilter(), PageRequest(page=1, page_size=2)
        )

        assert page.total == 3
        assert page.total_pages == 2
        assert [a.date for a in page.items] == [date(2024, 3, 12), date(2024, 3, 11)]
        assert page.items[0].employee.name == "Ana Pérez"


class TestOrganization:
    def test_department_positions_and_counts(self, users):
        departments = PostgresDepartmentRepository()
        positions = PostgresPositionRepository()
        department = departments.create_department(Department(id=uuid4(), name="Operaciones"))
        position = positions.create_position(
            Position(
                id=uuid4(),
                name="Supervisor",
                department_id=department.id,
                base_salary=Decimal("1500.50"),
            )
        )
        _user(users, position_id=position.id)

        assert departments.count_live_positions(department.id) == 1
        assert users.count_users_by_position(position.id, (UserStatus.ACTIVE,)) == 1
        stored = positions.get_position(position.id)
        assert stored.base_salary == Decimal("1500.50")
        assert stored.department.name == "Operaciones"

    def test_department_name_unique_including_deleted(self):
        departments = PostgresDepartmentRepository()
        department = departments.create_department(Department(id=uuid4(), name="Archivo"))
        assert departments.soft_delete_department(department.id) is not None

        with pytest.raises(ConstraintViolationError) as exc_info:
            departments.create_department(Department(id=uuid4(), name="Archivo"))

        assert exc_info.value.constraint == "uq_departments_name"

    def test_tombstones_blocked_by_live_dependents(self, users):
        departments = PostgresDepartmentRepository()
        positions = PostgresPositionRepository()
        department = departments.create_department(Department(id=uuid4(), name="Taller"))
        position = positions.create_position(
            Position(id=uuid4(), name="Mecánico", department_id=department.id)
        )
        employee = _user(users, position_id=position.id)

        assert departments.soft_delete_department(department.id) is None
        assert positions.soft_delete_position(position.id, (UserStatus.ACTIVE,)) is None

        users.update_user(employee.with_changes(status=UserStatus.DELETED))
        assert positions.soft_delete_position(position.id, (UserStatus.ACTIVE,))
        assert departments.soft_delete_department(department.id) is not None

    def test_position_under_deleted_department_is_foreign_key(self):
        departments = PostgresDepartmentRepository()
        positions = PostgresPositionRepository()
        department = departments.create_department(Department(id=uuid4(), name="Viejo"))
        assert departments.soft_delete_department(department.id) is not None

        with pytest.raises(ConstraintViolationError) as exc_info:
            positions.create_position(
                Position(id=uuid4(), name="Cargo", department_id=department.id)
            )

        assert exc_info.value.constraint == "fk_positions_department_id__departments"

    def test_camp_hard_delete(self, users):
        camps = PostgresCampRepository()
        employee = _user(users)
        camp = camps.create_camp(Camp(id=uuid4(), name="Norte", employee_id=employee.id))

        assert camps.get_camp(camp.id).employee.id == employee.id
        assert camps.delete_camp(camp.id) is True
        assert camps.get_camp(camp.id) is None
        assert camps.delete_camp(camp.id) is False
