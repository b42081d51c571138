from .attendance_queries import GetAttendanceUseCase, ListAttendancesUseCase
from .attendance_statistics import (
    EmployeeAttendanceStatistics,
    GetAttendanceStatisticsUseCase,
    attendance_percentage,
)
from .create_attendance import (
    CreateAttendanceInput,
    CreateAttendanceUseCase,
    RegisterEntryInput,
    RegisterEntryUseCase,
)
from .delete_attendance import DeleteAttendanceUseCase
from .register_exit import RegisterExitUseCase
from .update_attendance import UpdateAttendanceInput, UpdateAttendanceUseCase

__all__ = [
    "CreateAttendanceInput",
    "CreateAttendanceUseCase",
    "RegisterEntryInput",
    "RegisterEntryUseCase",
    "RegisterExitUseCase",
    "UpdateAttendanceInput",
    "UpdateAttendanceUseCase",
    "DeleteAttendanceUseCase",
    "GetAttendanceUseCase",
    "ListAttendancesUseCase",
    "GetAttendanceStatisticsUseCase",
    "EmployeeAttendanceStatistics",
    "attendance_percentage",
]
