"""
Unit tests for department / position deletion (in-memory repositories).

Covers:
  - a dependent written after the delete pre-check still blocks the tombstone
  - a parent tombstoned after a create pre-read turns the write into NOT_FOUND
  - tombstoned rows are never revived by a later update
"""

from uuid import uuid4

import pytest

from hr_api.application.usecases import (
    CreateDepartmentInput,
    CreateDepartmentUseCase,
    CreatePositionInput,
    CreatePositionUseCase,
    DeleteDepartmentUseCase,
    DeletePositionUseCase,
    ErrorCode,
)
from hr_api.container import (
    get_department_repository,
    get_position_repository,
    get_user_repository,
)
from hr_api.crosscutting.exceptions import ConstraintViolationError
from hr_api.domain.entities import Position
from hr_api.identity.users import UserStatus

pytestmark = pytest.mark.unit


@pytest.fixture
def department():
    result = CreateDepartmentUseCase(get_department_repository()).execute(
        CreateDepartmentInput(name="Operaciones")
    )
    assert result.ok
    return result.value


@pytest.fixture
def create_position_uc() -> CreatePositionUseCase:
    return CreatePositionUseCase(get_position_repository(), get_department_repository())


def _position(department_id, name="Supervisor") -> Position:
    return Position(id=uuid4(), name=name, department_id=department_id)


class TestDeleteDepartment:
    def test_position_created_after_pre_check_blocks_delete(
        self, department, monkeypatch
    ):
        departments = get_department_repository()

        def stale_count(department_id):
            # A position lands right after the dependents pre-check.
            get_position_repository().create_position(_position(department_id))
            return 0

        monkeypatch.setattr(departments, "count_live_positions", stale_count)

        result = DeleteDepartmentUseCase(departments).execute(department.id)

        assert result.error.code == ErrorCode.CONFLICT
        assert departments.get_department(department.id) is not None

    def test_delete_without_positions(self, department):
        departments = get_department_repository()

        result = DeleteDepartmentUseCase(departments).execute(department.id)

        assert result.ok
        assert result.value.is_deleted
        assert departments.get_department(department.id) is None

    def test_second_delete_is_not_found(self, department):
        delete = DeleteDepartmentUseCase(get_department_repository())

        assert delete.execute(department.id).ok
        assert delete.execute(department.id).error.code == ErrorCode.NOT_FOUND

    def test_update_does_not_revive_deleted_department(self, department):
        departments = get_department_repository()
        assert departments.soft_delete_department(department.id) is not None

        assert departments.update_department(department) is None
        assert departments.get_department(department.id) is None


class TestCreatePosition:
    def test_department_deleted_after_pre_read_is_not_found(
        self, department, create_position_uc, monkeypatch
    ):
        departments = get_department_repository()
        real_get = departments.get_department

        def get_then_delete(department_id, **kwargs):
            found = real_get(department_id, **kwargs)
            departments.soft_delete_department(department_id)
            return found

        monkeypatch.setattr(departments, "get_department", get_then_delete)

        result = create_position_uc.execute(
            CreatePositionInput(name="Supervisor", department_id=department.id)
        )

        assert result.error.code == ErrorCode.NOT_FOUND
        assert get_position_repository().statistics().total == 0


class TestDeletePosition:
    def test_user_assigned_after_pre_check_blocks_delete(
        self, department, make_user, monkeypatch
    ):
        positions = get_position_repository()
        users = get_user_repository()
        position = positions.create_position(_position(department.id))

        def stale_count(position_id, statuses):
            make_user(position_id=position_id)
            return 0

        monkeypatch.setattr(users, "count_users_by_position", stale_count)

        result = DeletePositionUseCase(positions, users).execute(position.id)

        assert result.error.code == ErrorCode.CONFLICT
        assert positions.get_position(position.id) is not None

    def test_deleted_users_do_not_block(self, department, make_user):
        positions = get_position_repository()
        position = positions.create_position(_position(department.id))
        make_user(position_id=position.id, status=UserStatus.DELETED)

        result = DeletePositionUseCase(positions, get_user_repository()).execute(
            position.id
        )

        assert result.ok
        assert result.value.is_deleted

    def test_live_user_cannot_point_at_deleted_position(self, department, make_user):
        positions = get_position_repository()
        position = positions.create_position(_position(department.id))
        assert positions.soft_delete_position(position.id, (UserStatus.ACTIVE,))

        with pytest.raises(ConstraintViolationError) as exc_info:
            make_user(position_id=position.id)

        assert exc_info.value.is_foreign_key
