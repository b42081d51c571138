"""
Use Cases Layer (Business Operations)

This package exposes entry points for business logic, organized by feature.

Structure
---------
usecases/
├── auth/          # Register, login, verify session, change password
├── attendance/    # Attendance ledger (create, entry/exit, update, delete, reads, stats)
├── users/         # User administration and profile
├── departments/   # Department management
├── positions/     # Position management
├── camps/         # Camp management and employee assignment
└── results.py     # Shared Result / ErrorCode contract

Usage
-----
Import from subpackages for clarity:

    from hr_api.application.usecases.attendance import CreateAttendanceUseCase

Or use the barrel exports from this module:

    from hr_api.application.usecases import CreateAttendanceUseCase, ErrorCode
"""

from .attendance import (
    CreateAttendanceInput,
    CreateAttendanceUseCase,
    DeleteAttendanceUseCase,
    EmployeeAttendanceStatistics,
    GetAttendanceStatisticsUseCase,
    GetAttendanceUseCase,
    ListAttendancesUseCase,
    RegisterEntryInput,
    RegisterEntryUseCase,
    RegisterExitUseCase,
    UpdateAttendanceInput,
    UpdateAttendanceUseCase,
)
from .auth import (
    ChangePasswordInput,
    ChangePasswordUseCase,
    LoginOutput,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    VerifySessionUseCase,
)
from .camps import (
    AssignCampEmployeeUseCase,
    CreateCampInput,
    CreateCampUseCase,
    DeleteCampUseCase,
    GetCampStatisticsUseCase,
    GetCampUseCase,
    ListCampsUseCase,
    RemoveCampEmployeeUseCase,
    UpdateCampInput,
    UpdateCampUseCase,
)
from .departments import (
    CreateDepartmentInput,
    CreateDepartmentUseCase,
    DeleteDepartmentUseCase,
    GetDepartmentStatisticsUseCase,
    GetDepartmentUseCase,
    ListDepartmentPositionsUseCase,
    ListDepartmentsUseCase,
    UpdateDepartmentInput,
    UpdateDepartmentUseCase,
)
from .positions import (
    CreatePositionInput,
    CreatePositionUseCase,
    DeletePositionUseCase,
    GetPositionStatisticsUseCase,
    GetPositionUseCase,
    ListPositionEmployeesUseCase,
    ListPositionsUseCase,
    UpdatePositionInput,
    UpdatePositionUseCase,
)
from .results import ErrorCode, Result, UseCaseError
from .users import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateProfileInput,
    UpdateProfileUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)

__all__ = [
    # Results
    "ErrorCode",
    "Result",
    "UseCaseError",
    # Auth
    "RegisterUserInput",
    "RegisterUserUseCase",
    "LoginOutput",
    "LoginUserUseCase",
    "VerifySessionUseCase",
    "ChangePasswordInput",
    "ChangePasswordUseCase",
    # Attendance
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
    # Users
    "CreateUserInput",
    "CreateUserUseCase",
    "UpdateUserInput",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "UpdateProfileInput",
    "UpdateProfileUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    # Departments
    "CreateDepartmentInput",
    "CreateDepartmentUseCase",
    "UpdateDepartmentInput",
    "UpdateDepartmentUseCase",
    "DeleteDepartmentUseCase",
    "GetDepartmentUseCase",
    "ListDepartmentsUseCase",
    "ListDepartmentPositionsUseCase",
    "GetDepartmentStatisticsUseCase",
    # Positions
    "CreatePositionInput",
    "CreatePositionUseCase",
    "UpdatePositionInput",
    "UpdatePositionUseCase",
    "DeletePositionUseCase",
    "GetPositionUseCase",
    "ListPositionsUseCase",
    "ListPositionEmployeesUseCase",
    "GetPositionStatisticsUseCase",
    # Camps
    "CreateCampInput",
    "CreateCampUseCase",
    "UpdateCampInput",
    "UpdateCampUseCase",
    "DeleteCampUseCase",
    "AssignCampEmployeeUseCase",
    "RemoveCampEmployeeUseCase",
    "GetCampUseCase",
    "ListCampsUseCase",
    "GetCampStatisticsUseCase",
]
