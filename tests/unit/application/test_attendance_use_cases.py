"""
Unit tests for the attendance ledger use cases (in-memory repositories).

Covers:
  - one live record per (employee, date), including the concurrent race
  - soft delete frees the day
  - exit is written once; update policy for an already registered exit
  - writes racing a delete or an exit keep the stored state consistent
"""

import threading
from datetime import date, time
from uuid import uuid4

import pytest

from hr_api.application.usecases import (
    CreateAttendanceInput,
    CreateAttendanceUseCase,
    DeleteAttendanceUseCase,
    ErrorCode,
    GetAttendanceStatisticsUseCase,
    RegisterEntryInput,
    RegisterEntryUseCase,
    RegisterExitUseCase,
    UpdateAttendanceInput,
    UpdateAttendanceUseCase,
)
from hr_api.container import get_attendance_repository, get_user_repository
from hr_api.domain.entities import AttendanceStatus, RecordStatus

pytestmark = pytest.mark.unit

DAY = date(2024, 3, 11)


@pytest.fixture
def create_uc() -> CreateAttendanceUseCase:
    return CreateAttendanceUseCase(get_attendance_repository(), get_user_repository())


def _create(create_uc, employee_id, **overrides):
    data = {"employee_id": employee_id, "date": DAY, "entry_time": time(8, 0)}
    data.update(overrides)
    return create_uc.execute(CreateAttendanceInput(**data))


def _interleave_after_first_read(monkeypatch, repo, action):
    """Run `action` right after the first get_attendance() read returns."""
    real_get = repo.get_attendance
    done = []

    def get_then_interleave(attendance_id, **kwargs):
        found = real_get(attendance_id, **kwargs)
        if not done:
            done.append(attendance_id)
            action()
        return found

    monkeypatch.setattr(repo, "get_attendance", get_then_interleave)


class TestCreateAttendance:
    def test_defaults_to_present_and_active(self, create_uc, employee):
        result = _create(create_uc, employee.id)

        assert result.ok
        assert result.value.status == AttendanceStatus.PRESENT
        assert result.value.record_status == RecordStatus.ACTIVE
        assert result.value.employee.name == "Ana Pérez"

    def test_unknown_employee_is_not_found(self, create_uc):
        result = _create(create_uc, uuid4())

        assert result.error.code == ErrorCode.NOT_FOUND

    def test_second_record_same_day_is_conflict(self, create_uc, employee):
        assert _create(create_uc, employee.id).ok

        result = _create(create_uc, employee.id, entry_time=time(9, 0))

        assert result.error.code == ErrorCode.CONFLICT

    def test_other_day_is_allowed(self, create_uc, employee):
        assert _create(create_uc, employee.id).ok
        assert _create(create_uc, employee.id, date=date(2024, 3, 12)).ok

    def test_soft_delete_frees_the_day(self, create_uc, employee):
        first = _create(create_uc, employee.id).value
        delete = DeleteAttendanceUseCase(get_attendance_repository())

        assert delete.execute(first.id).ok
        again = _create(create_uc, employee.id)

        assert again.ok
        assert again.value.id != first.id

    def test_deleted_record_is_not_found_twice(self, create_uc, employee):
        record = _create(create_uc, employee.id).value
        delete = DeleteAttendanceUseCase(get_attendance_repository())

        assert delete.execute(record.id).ok
        assert delete.execute(record.id).error.code == ErrorCode.NOT_FOUND

    def test_concurrent_creates_yield_exactly_one_record(
        self, create_uc, employee, monkeypatch
    ):
        repo = get_attendance_repository()
        barrier = threading.Barrier(2, timeout=5)

        def racing_check(employee_id, day, *, exclude_id=None):
            # Both requests pass the pre-check before either writes.
            barrier.wait()
            return False

        monkeypatch.setattr(repo, "exists_live_for_day", racing_check)

        results = []

        def worker():
            results.append(_create(create_uc, employee.id))

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert len(results) == 2
        assert sum(1 for r in results if r.ok) == 1
        assert [r.error.code for r in results if not r.ok] == [ErrorCode.CONFLICT]


class TestRegisterEntryAndExit:
    def test_entry_then_exit(self, create_uc, employee):
        entry = RegisterEntryUseCase(create_uc).execute(
            RegisterEntryInput(employee_id=employee.id, date=DAY, entry_time=time(8, 0))
        )
        assert entry.ok
        assert entry.value.exit_time is None

        exit_uc = RegisterExitUseCase(get_attendance_repository())
        result = exit_uc.execute(entry.value.id, time(16, 30))

        assert result.ok
        assert result.value.exit_time == time(16, 30)

    def test_duplicate_entry_has_entry_message(self, create_uc, employee):
        entry_uc = RegisterEntryUseCase(create_uc)
        data = RegisterEntryInput(employee_id=employee.id, date=DAY, entry_time=time(8, 0))

        assert entry_uc.execute(data).ok
        result = entry_uc.execute(data)

        assert result.error.code == ErrorCode.CONFLICT
        assert "entrada" in result.error.message.lower()

    def test_exit_twice_is_rejected(self, create_uc, employee):
        record = _create(create_uc, employee.id).value
        exit_uc = RegisterExitUseCase(get_attendance_repository())

        assert exit_uc.execute(record.id, time(17, 0)).ok
        second = exit_uc.execute(record.id, time(18, 0))

        assert second.error.code == ErrorCode.CONFLICT
        stored = get_attendance_repository().get_attendance(record.id)
        assert stored.exit_time == time(17, 0)

    def test_exit_for_unknown_record_is_not_found(self):
        exit_uc = RegisterExitUseCase(get_attendance_repository())
        assert exit_uc.execute(uuid4(), time(17, 0)).error.code == ErrorCode.NOT_FOUND

    def test_exit_for_deleted_record_is_not_found(self, create_uc, employee):
        repo = get_attendance_repository()
        record = _create(create_uc, employee.id).value
        assert DeleteAttendanceUseCase(repo).execute(record.id).ok

        result = RegisterExitUseCase(repo).execute(record.id, time(17, 0))

        assert result.error.code == ErrorCode.NOT_FOUND
        stored = repo.get_attendance(record.id, include_deleted=True)
        assert stored.record_status == RecordStatus.DELETED
        assert stored.exit_time is None

    def test_delete_between_read_and_exit_write_is_not_found(
        self, create_uc, employee, monkeypatch
    ):
        repo = get_attendance_repository()
        record = _create(create_uc, employee.id).value
        _interleave_after_first_read(
            monkeypatch, repo, lambda: DeleteAttendanceUseCase(repo).execute(record.id)
        )

        result = RegisterExitUseCase(repo).execute(record.id, time(17, 0))

        assert result.error.code == ErrorCode.NOT_FOUND
        stored = repo.get_attendance(record.id, include_deleted=True)
        assert stored.record_status == RecordStatus.DELETED
        assert stored.exit_time is None

    def test_concurrent_exits_write_exactly_once(
        self, create_uc, employee, monkeypatch
    ):
        repo = get_attendance_repository()
        record = _create(create_uc, employee.id).value
        real_get = repo.get_attendance
        barrier = threading.Barrier(2, timeout=5)
        seen = threading.local()

        def racing_get(attendance_id, **kwargs):
            found = real_get(attendance_id, **kwargs)
            if not getattr(seen, "read", False):
                # Both requests see "no exit yet" before either writes.
                seen.read = True
                barrier.wait()
            return found

        monkeypatch.setattr(repo, "get_attendance", racing_get)
        exit_uc = RegisterExitUseCase(repo)
        results = {}

        def worker(exit_time):
            results[exit_time] = exit_uc.execute(record.id, exit_time)

        threads = [
            threading.Thread(target=worker, args=(exit_time,))
            for exit_time in (time(17, 0), time(18, 0))
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert len(results) == 2
        winners = [t for t, r in results.items() if r.ok]
        assert len(winners) == 1
        losers = [r.error.code for r in results.values() if not r.ok]
        assert losers == [ErrorCode.CONFLICT]
        assert real_get(record.id).exit_time == winners[0]


class TestUpdateAttendance:
    def test_overwrite_allowed_by_default(self, create_uc, employee):
        record = _create(create_uc, employee.id, exit_time=time(16, 0)).value
        update = UpdateAttendanceUseCase(get_attendance_repository())

        result = update.execute(
            UpdateAttendanceInput(attendance_id=record.id, exit_time=time(17, 0))
        )

        assert result.ok
        assert result.value.exit_time == time(17, 0)

    def test_overwrite_rejected_when_disabled(self, create_uc, employee):
        record = _create(create_uc, employee.id, exit_time=time(16, 0)).value
        update = UpdateAttendanceUseCase(
            get_attendance_repository(), allow_exit_overwrite=False
        )

        result = update.execute(
            UpdateAttendanceInput(attendance_id=record.id, exit_time=time(17, 0))
        )

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    def test_first_exit_allowed_even_when_overwrite_disabled(self, create_uc, employee):
        record = _create(create_uc, employee.id).value
        update = UpdateAttendanceUseCase(
            get_attendance_repository(), allow_exit_overwrite=False
        )

        result = update.execute(
            UpdateAttendanceInput(attendance_id=record.id, exit_time=time(17, 0))
        )

        assert result.ok

    def test_moving_to_occupied_date_is_conflict(self, create_uc, employee):
        _create(create_uc, employee.id, date=date(2024, 3, 12))
        record = _create(create_uc, employee.id).value
        update = UpdateAttendanceUseCase(get_attendance_repository())

        result = update.execute(
            UpdateAttendanceInput(attendance_id=record.id, date=date(2024, 3, 12))
        )

        assert result.error.code == ErrorCode.CONFLICT

    def test_record_status_deleted_goes_through_delete(self, create_uc, employee):
        record = _create(create_uc, employee.id).value
        update = UpdateAttendanceUseCase(get_attendance_repository())

        result = update.execute(
            UpdateAttendanceInput(
                attendance_id=record.id, record_status=RecordStatus.DELETED
            )
        )

        assert result.error.code == ErrorCode.VALIDATION_ERROR

    def test_delete_between_read_and_save_is_not_found(
        self, create_uc, employee, monkeypatch
    ):
        repo = get_attendance_repository()
        record = _create(create_uc, employee.id).value
        _interleave_after_first_read(
            monkeypatch, repo, lambda: DeleteAttendanceUseCase(repo).execute(record.id)
        )

        result = UpdateAttendanceUseCase(repo).execute(
            UpdateAttendanceInput(attendance_id=record.id, observations="tarde")
        )

        assert result.error.code == ErrorCode.NOT_FOUND
        stored = repo.get_attendance(record.id, include_deleted=True)
        assert stored.record_status == RecordStatus.DELETED
        assert stored.observations is None

    def test_exit_registered_mid_update_is_kept(self, create_uc, employee, monkeypatch):
        repo = get_attendance_repository()
        record = _create(create_uc, employee.id).value
        _interleave_after_first_read(
            monkeypatch,
            repo,
            lambda: RegisterExitUseCase(repo).execute(record.id, time(17, 0)),
        )

        result = UpdateAttendanceUseCase(repo).execute(
            UpdateAttendanceInput(attendance_id=record.id, observations="tarde")
        )

        assert result.ok
        assert result.value.observations == "tarde"
        assert result.value.exit_time == time(17, 0)

    def test_locked_exit_set_mid_update_is_not_overwritten(
        self, create_uc, employee, monkeypatch
    ):
        repo = get_attendance_repository()
        record = _create(create_uc, employee.id).value
        _interleave_after_first_read(
            monkeypatch,
            repo,
            lambda: RegisterExitUseCase(repo).execute(record.id, time(17, 0)),
        )
        update = UpdateAttendanceUseCase(repo, allow_exit_overwrite=False)

        result = update.execute(
            UpdateAttendanceInput(attendance_id=record.id, exit_time=time(18, 0))
        )

        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert repo.get_attendance(record.id).exit_time == time(17, 0)


class TestAttendanceStatistics:
    def test_employee_percentage(self, create_uc, employee):
        _create(create_uc, employee.id, date=date(2024, 3, 11))
        _create(create_uc, employee.id, date=date(2024, 3, 12))
        _create(
            create_uc, employee.id, date=date(2024, 3, 13), status=AttendanceStatus.LATE
        )

        stats = GetAttendanceStatisticsUseCase(get_attendance_repository())
        result = stats.for_employee(employee.id).value

        assert result.counts.total == 3
        assert result.counts.present == 2
        assert result.counts.late == 1
        assert result.attendance_percentage == "66.67"

    def test_employee_without_records_is_zero(self, employee):
        stats = GetAttendanceStatisticsUseCase(get_attendance_repository())
        assert stats.for_employee(employee.id).value.attendance_percentage == "0.00"

    def test_deleted_records_do_not_count(self, create_uc, employee):
        record = _create(create_uc, employee.id).value
        DeleteAttendanceUseCase(get_attendance_repository()).execute(record.id)

        stats = GetAttendanceStatisticsUseCase(get_attendance_repository())
        assert stats.general().value.total == 0

    def test_inverted_range_is_validation_error(self):
        stats = GetAttendanceStatisticsUseCase(get_attendance_repository())
        result = stats.by_date_range(date(2024, 3, 12), date(2024, 3, 11))
        assert result.error.code == ErrorCode.VALIDATION_ERROR
