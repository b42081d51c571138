"""
===============================================================================
TARJETA CRC — hr_api/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, servicios de identidad, casos de uso)
    siguiendo DIP.
  - Exponer factories para FastAPI (Depends) y scripts.
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - hr_api.crosscutting.config.get_settings
  - hr_api.domain.repositories.* (puertos)
  - hr_api.infrastructure.repositories.* (implementaciones)
  - hr_api.identity.* (TokenService, AuthGuard)
  - hr_api.application.usecases.* (casos de uso)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (use cases dependen de puertos)
  - Lazy singletons con lru_cache

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
  - En test los repos in-memory comparten un único InMemoryStore para que
    joins y constraints entre tablas sean consistentes.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    AssignCampEmployeeUseCase,
    ChangePasswordUseCase,
    CreateAttendanceUseCase,
    CreateCampUseCase,
    CreateDepartmentUseCase,
    CreatePositionUseCase,
    CreateUserUseCase,
    DeleteAttendanceUseCase,
    DeleteCampUseCase,
    DeleteDepartmentUseCase,
    DeletePositionUseCase,
    DeleteUserUseCase,
    GetAttendanceStatisticsUseCase,
    GetAttendanceUseCase,
    GetCampStatisticsUseCase,
    GetCampUseCase,
    GetDepartmentStatisticsUseCase,
    GetDepartmentUseCase,
    GetPositionStatisticsUseCase,
    GetPositionUseCase,
    GetUserUseCase,
    ListAttendancesUseCase,
    ListCampsUseCase,
    ListDepartmentPositionsUseCase,
    ListDepartmentsUseCase,
    ListPositionEmployeesUseCase,
    ListPositionsUseCase,
    ListUsersUseCase,
    LoginUserUseCase,
    RegisterEntryUseCase,
    RegisterExitUseCase,
    RegisterUserUseCase,
    RemoveCampEmployeeUseCase,
    UpdateAttendanceUseCase,
    UpdateCampUseCase,
    UpdateDepartmentUseCase,
    UpdatePositionUseCase,
    UpdateProfileUseCase,
    UpdateUserUseCase,
    VerifySessionUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    AttendanceRepository,
    CampRepository,
    DepartmentRepository,
    PositionRepository,
    UserRepository,
)
from .identity.auth_users import AuthGuard
from .identity.tokens import AuthConfig, TokenService
from .infrastructure.repositories import (
    InMemoryAttendanceRepository,
    InMemoryCampRepository,
    InMemoryDepartmentRepository,
    InMemoryPositionRepository,
    InMemoryStore,
    InMemoryUserRepository,
    PostgresAttendanceRepository,
    PostgresCampRepository,
    PostgresDepartmentRepository,
    PostgresPositionRepository,
    PostgresUserRepository,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """app_env ∈ {"test", "testing", "ci"} => se favorecen in-memory adapters."""
    return get_settings().is_test()


@lru_cache(maxsize=1)
def get_in_memory_store() -> InMemoryStore:
    """Store compartido por todos los repos in-memory."""
    return InMemoryStore()


# =============================================================================
# Identidad (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_auth_config() -> AuthConfig:
    return AuthConfig.from_settings(get_settings())


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    return TokenService(get_auth_config())


@lru_cache(maxsize=1)
def get_auth_guard() -> AuthGuard:
    return AuthGuard(get_auth_config(), get_token_service())


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryUserRepository(get_in_memory_store())
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_attendance_repository() -> AttendanceRepository:
    if _is_test_env():
        return InMemoryAttendanceRepository(get_in_memory_store())
    return PostgresAttendanceRepository()


@lru_cache(maxsize=1)
def get_department_repository() -> DepartmentRepository:
    if _is_test_env():
        return InMemoryDepartmentRepository(get_in_memory_store())
    return PostgresDepartmentRepository()


@lru_cache(maxsize=1)
def get_position_repository() -> PositionRepository:
    if _is_test_env():
        return InMemoryPositionRepository(get_in_memory_store())
    return PostgresPositionRepository()


@lru_cache(maxsize=1)
def get_camp_repository() -> CampRepository:
    if _is_test_env():
        return InMemoryCampRepository(get_in_memory_store())
    return PostgresCampRepository()


def reset_container() -> None:
    """Limpia los singletons (tests / recarga de Settings)."""
    for factory in (
        get_in_memory_store,
        get_auth_config,
        get_token_service,
        get_auth_guard,
        get_user_repository,
        get_attendance_repository,
        get_department_repository,
        get_position_repository,
        get_camp_repository,
    ):
        factory.cache_clear()


# =============================================================================
# Use cases: auth
# =============================================================================


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(get_user_repository())


def get_login_user_use_case() -> LoginUserUseCase:
    return LoginUserUseCase(get_user_repository(), get_token_service())


def get_verify_session_use_case() -> VerifySessionUseCase:
    return VerifySessionUseCase(get_user_repository(), get_token_service())


def get_change_password_use_case() -> ChangePasswordUseCase:
    return ChangePasswordUseCase(get_user_repository())


# =============================================================================
# Use cases: users
# =============================================================================


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(get_user_repository(), get_position_repository())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(get_user_repository(), get_position_repository())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(get_user_repository())


def get_update_profile_use_case() -> UpdateProfileUseCase:
    return UpdateProfileUseCase(get_update_user_use_case())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(get_user_repository())


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_repository())


# =============================================================================
# Use cases: attendance
# =============================================================================


def get_create_attendance_use_case() -> CreateAttendanceUseCase:
    return CreateAttendanceUseCase(get_attendance_repository(), get_user_repository())


def get_register_entry_use_case() -> RegisterEntryUseCase:
    return RegisterEntryUseCase(get_create_attendance_use_case())


def get_register_exit_use_case() -> RegisterExitUseCase:
    return RegisterExitUseCase(get_attendance_repository())


def get_update_attendance_use_case() -> UpdateAttendanceUseCase:
    return UpdateAttendanceUseCase(
        get_attendance_repository(),
        allow_exit_overwrite=get_settings().allow_exit_overwrite_via_update,
    )


def get_delete_attendance_use_case() -> DeleteAttendanceUseCase:
    return DeleteAttendanceUseCase(get_attendance_repository())


def get_get_attendance_use_case() -> GetAttendanceUseCase:
    return GetAttendanceUseCase(get_attendance_repository())


def get_list_attendances_use_case() -> ListAttendancesUseCase:
    return ListAttendancesUseCase(get_attendance_repository())


def get_attendance_statistics_use_case() -> GetAttendanceStatisticsUseCase:
    return GetAttendanceStatisticsUseCase(get_attendance_repository())


# =============================================================================
# Use cases: departments
# =============================================================================


def get_create_department_use_case() -> CreateDepartmentUseCase:
    return CreateDepartmentUseCase(get_department_repository())


def get_update_department_use_case() -> UpdateDepartmentUseCase:
    return UpdateDepartmentUseCase(get_department_repository())


def get_delete_department_use_case() -> DeleteDepartmentUseCase:
    return DeleteDepartmentUseCase(get_department_repository())


def get_get_department_use_case() -> GetDepartmentUseCase:
    return GetDepartmentUseCase(get_department_repository())


def get_list_departments_use_case() -> ListDepartmentsUseCase:
    return ListDepartmentsUseCase(get_department_repository())


def get_list_department_positions_use_case() -> ListDepartmentPositionsUseCase:
    return ListDepartmentPositionsUseCase(
        get_department_repository(), get_position_repository()
    )


def get_department_statistics_use_case() -> GetDepartmentStatisticsUseCase:
    return GetDepartmentStatisticsUseCase(get_department_repository())


# =============================================================================
# Use cases: positions
# =============================================================================


def get_create_position_use_case() -> CreatePositionUseCase:
    return CreatePositionUseCase(get_position_repository(), get_department_repository())


def get_update_position_use_case() -> UpdatePositionUseCase:
    return UpdatePositionUseCase(get_position_repository(), get_department_repository())


def get_delete_position_use_case() -> DeletePositionUseCase:
    return DeletePositionUseCase(get_position_repository(), get_user_repository())


def get_get_position_use_case() -> GetPositionUseCase:
    return GetPositionUseCase(get_position_repository())


def get_list_positions_use_case() -> ListPositionsUseCase:
    return ListPositionsUseCase(get_position_repository())


def get_list_position_employees_use_case() -> ListPositionEmployeesUseCase:
    return ListPositionEmployeesUseCase(get_position_repository(), get_user_repository())


def get_position_statistics_use_case() -> GetPositionStatisticsUseCase:
    return GetPositionStatisticsUseCase(get_position_repository())


# =============================================================================
# Use cases: camps
# =============================================================================


def get_create_camp_use_case() -> CreateCampUseCase:
    return CreateCampUseCase(get_camp_repository(), get_user_repository())


def get_update_camp_use_case() -> UpdateCampUseCase:
    return UpdateCampUseCase(get_camp_repository(), get_user_repository())


def get_delete_camp_use_case() -> DeleteCampUseCase:
    return DeleteCampUseCase(get_camp_repository())


def get_assign_camp_employee_use_case() -> AssignCampEmployeeUseCase:
    return AssignCampEmployeeUseCase(get_camp_repository(), get_user_repository())


def get_remove_camp_employee_use_case() -> RemoveCampEmployeeUseCase:
    return RemoveCampEmployeeUseCase(get_camp_repository())


def get_get_camp_use_case() -> GetCampUseCase:
    return GetCampUseCase(get_camp_repository())


def get_list_camps_use_case() -> ListCampsUseCase:
    return ListCampsUseCase(get_camp_repository())


def get_camp_statistics_use_case() -> GetCampStatisticsUseCase:
    return GetCampStatisticsUseCase(get_camp_repository())
