"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/attendances.py
===============================================================================

Class/Module:
    Attendance Router

Responsibilities:
    - Exponer el ledger de asistencia: create / entry / exit / update / delete.
    - Listados paginados (general, por empleado, por fecha, por rango, por
      status, búsqueda por nombre de empleado).
    - Estadísticas (general, por empleado, por rango de fechas).
    - Enforce de roles: escrituras admin o employee; lecturas cualquier usuario
      autenticado.

Collaborators:
    - hr_api.application.usecases (attendance)
    - hr_api.identity.dependencies (require_user, require_staff)
    - hr_api.container (factories DI)
    - schemas.attendances (DTOs Pydantic)

Notas:
    - Las rutas estáticas (/entry, /search, /statistics/..., /date-range) se
      declaran antes de /{attendance_id} para que no las capture el path param.
===============================================================================
"""

from __future__ import annotations

from datetime import date
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from .....application.usecases import (
    CreateAttendanceInput,
    CreateAttendanceUseCase,
    DeleteAttendanceUseCase,
    GetAttendanceStatisticsUseCase,
    GetAttendanceUseCase,
    ListAttendancesUseCase,
    RegisterEntryInput,
    RegisterEntryUseCase,
    RegisterExitUseCase,
    UpdateAttendanceInput,
    UpdateAttendanceUseCase,
)
from .....container import (
    get_attendance_statistics_use_case,
    get_create_attendance_use_case,
    get_delete_attendance_use_case,
    get_get_attendance_use_case,
    get_list_attendances_use_case,
    get_register_entry_use_case,
    get_register_exit_use_case,
    get_update_attendance_use_case,
)
from .....crosscutting.envelope import Envelope, paginated, success
from .....crosscutting.pagination import PageRequest
from .....domain.entities import AttendanceStatus, RecordStatus
from .....domain.repositories import AttendanceFilter
from .....identity.auth_users import Identity
from .....identity.dependencies import require_staff, require_user
from ..dependencies import get_page_request, get_search_term
from ..error_mapping import unwrap
from ..schemas.attendances import (
    AttendanceGeneralStatsRes,
    AttendanceRes,
    CreateAttendanceReq,
    DailyAttendanceStatsRes,
    EmployeeAttendanceStatsRes,
    RegisterEntryReq,
    RegisterExitReq,
    UpdateAttendanceReq,
)
from ..schemas.common import DateField

router = APIRouter()

_TAGS = ["attendances"]
_MSG_LIST = "Registros de asistencia obtenidos exitosamente"


def _list(
    use_case: ListAttendancesUseCase, filters: AttendanceFilter, page: PageRequest
):
    return unwrap(use_case.execute(filters, page)).map(AttendanceRes.from_entity)


# =============================================================================
# Escrituras
# =============================================================================


@router.post(
    "/attendances",
    response_model=Envelope[AttendanceRes],
    status_code=201,
    tags=_TAGS,
)
def create_attendance(
    req: CreateAttendanceReq,
    use_case: CreateAttendanceUseCase = Depends(get_create_attendance_use_case),
    _staff: Identity = Depends(require_staff()),
):
    attendance = unwrap(
        use_case.execute(
            CreateAttendanceInput(
                employee_id=req.employee_id,
                date=req.date,
                entry_time=req.entry_time,
                exit_time=req.exit_time,
                status=req.status,
                observations=req.observations,
            )
        )
    )
    return success(
        "Registro de asistencia creado exitosamente",
        AttendanceRes.from_entity(attendance),
    )


@router.post(
    "/attendances/entry",
    response_model=Envelope[AttendanceRes],
    status_code=201,
    tags=_TAGS,
)
def register_entry(
    req: RegisterEntryReq,
    use_case: RegisterEntryUseCase = Depends(get_register_entry_use_case),
    _staff: Identity = Depends(require_staff()),
):
    attendance = unwrap(
        use_case.execute(
            RegisterEntryInput(
                employee_id=req.employee_id, date=req.date, entry_time=req.entry_time
            )
        )
    )
    return success(
        "Entrada registrada exitosamente", AttendanceRes.from_entity(attendance)
    )


# =============================================================================
# Listados
# =============================================================================


@router.get(
    "/attendances", response_model=Envelope[List[AttendanceRes]], tags=_TAGS
)
def list_attendances(
    page: PageRequest = Depends(get_page_request),
    use_case: ListAttendancesUseCase = Depends(get_list_attendances_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(_MSG_LIST, _list(use_case, AttendanceFilter(), page))


@router.get(
    "/attendances/search", response_model=Envelope[List[AttendanceRes]], tags=_TAGS
)
def search_attendances(
    q: str = Depends(get_search_term),
    page: PageRequest = Depends(get_page_request),
    use_case: ListAttendancesUseCase = Depends(get_list_attendances_use_case),
    _identity: Identity = Depends(require_user()),
):
    return paginated(
        "Búsqueda de asistencias realizada exitosamente",
        _list(use_case, AttendanceFilter(employee_name=q), page),
    )


@router.get(
    "/attendances/date-range",
    response_model=Envelope[List[AttendanceRes]],
    tags=_TAGS,
)
def list_attendances_by_date_range(
    start_date: DateField = Query(...),
    end_date: DateField = Query(...),
    page: PageRequest = Depends(get_page_request),
    use_case: ListAttendancesUseCase = Depends(get_list_attendances_use_case),
    _identity: Identity = Depends(require_user()),
):
    filters = AttendanceFilter(start_date=start_date, end_date=end_date)
    return paginated(_MSG_LIST, _list(use_case, filters, page))


@router.get(
    "/attendances/date/{on_date}",
    response_model=Envelope[List[AttendanceRes]],
    tags=_TAGS,
)
def list_attendances_by_date(
    on_date: DateField = Path(...),
    page: PageRequest = Depends(get_page_request),
    use_case: ListAttendancesUseCase = Depends(get_list_attendances_use_case),
    _identity: Identity = Depends(require_user()),
):
    filters = AttendanceFilter(on_date=on_date, order_by_employee_name=True)
    return paginated(_MSG_LIST, _list(use_case, filters, page))


@router.get(
    "/attendances/employee/{employee_id}",
    response_model=Envelope[List[AttendanceRes]],
    tags=_TAGS,
)
def list_attendances_by_employee(
    employee_id: UUID,
    page: PageRequest = Depends(get_page_request),
    use_case: ListAttendancesUseCase = Depends(get_list_attendances_use_case),
    _identity: Identity = Depends(require_user()),
):
    filters = AttendanceFilter(employee_id=employee_id)
    return paginated(_MSG_LIST, _list(use_case, filters, page))


@router.get(
    "/attendances/status/{status}",
    response_model=Envelope[List[AttendanceRes]],
    tags=_TAGS,
)
def list_attendances_by_status(
    status: AttendanceStatus,
    page: PageRequest = Depends(get_page_request),
    use_case: ListAttendancesUseCase = Depends(get_list_attendances_use_case),
    _identity: Identity = Depends(require_user()),
):
    filters = AttendanceFilter(status=status)
    return paginated(_MSG_LIST, _list(use_case, filters, page))


# =============================================================================
# Estadísticas
# =============================================================================


@router.get(
    "/attendances/statistics/general",
    response_model=Envelope[AttendanceGeneralStatsRes],
    tags=_TAGS,
)
def attendance_general_statistics(
    use_case: GetAttendanceStatisticsUseCase = Depends(
        get_attendance_statistics_use_case
    ),
    _identity: Identity = Depends(require_user()),
):
    counts = unwrap(use_case.general())
    return success(
        "Estadísticas generales obtenidas exitosamente",
        AttendanceGeneralStatsRes.from_counts(counts),
    )


@router.get(
    "/attendances/statistics/employee/{employee_id}",
    response_model=Envelope[EmployeeAttendanceStatsRes],
    tags=_TAGS,
)
def attendance_employee_statistics(
    employee_id: UUID,
    use_case: GetAttendanceStatisticsUseCase = Depends(
        get_attendance_statistics_use_case
    ),
    _identity: Identity = Depends(require_user()),
):
    stats = unwrap(use_case.for_employee(employee_id))
    return success(
        "Estadísticas del empleado obtenidas exitosamente",
        EmployeeAttendanceStatsRes.from_stats(stats),
    )


@router.get(
    "/attendances/statistics/date-range",
    response_model=Envelope[List[DailyAttendanceStatsRes]],
    tags=_TAGS,
)
def attendance_date_range_statistics(
    start_date: DateField = Query(...),
    end_date: DateField = Query(...),
    use_case: GetAttendanceStatisticsUseCase = Depends(
        get_attendance_statistics_use_case
    ),
    _identity: Identity = Depends(require_user()),
):
    daily = unwrap(use_case.by_date_range(start_date, end_date))
    return success(
        "Estadísticas por rango de fechas obtenidas exitosamente",
        [DailyAttendanceStatsRes.from_daily(item) for item in daily],
    )


# =============================================================================
# Por id
# =============================================================================


@router.get(
    "/attendances/{attendance_id}",
    response_model=Envelope[AttendanceRes],
    tags=_TAGS,
)
def get_attendance(
    attendance_id: UUID,
    use_case: GetAttendanceUseCase = Depends(get_get_attendance_use_case),
    _identity: Identity = Depends(require_user()),
):
    attendance = unwrap(use_case.execute(attendance_id))
    return success(
        "Registro de asistencia obtenido exitosamente",
        AttendanceRes.from_entity(attendance),
    )


@router.post(
    "/attendances/{attendance_id}/exit",
    response_model=Envelope[AttendanceRes],
    tags=_TAGS,
)
def register_exit(
    attendance_id: UUID,
    req: RegisterExitReq,
    use_case: RegisterExitUseCase = Depends(get_register_exit_use_case),
    _staff: Identity = Depends(require_staff()),
):
    attendance = unwrap(use_case.execute(attendance_id, req.exit_time))
    return success(
        "Salida registrada exitosamente", AttendanceRes.from_entity(attendance)
    )


@router.put(
    "/attendances/{attendance_id}",
    response_model=Envelope[AttendanceRes],
    tags=_TAGS,
)
def update_attendance(
    attendance_id: UUID,
    req: UpdateAttendanceReq,
    use_case: UpdateAttendanceUseCase = Depends(get_update_attendance_use_case),
    _staff: Identity = Depends(require_staff()),
):
    attendance = unwrap(
        use_case.execute(
            UpdateAttendanceInput(
                attendance_id=attendance_id,
                date=req.date,
                entry_time=req.entry_time,
                exit_time=req.exit_time,
                status=req.status,
                observations=req.observations,
                record_status=(
                    RecordStatus(req.record_status) if req.record_status else None
                ),
            )
        )
    )
    return success(
        "Registro de asistencia actualizado exitosamente",
        AttendanceRes.from_entity(attendance),
    )


@router.delete("/attendances/{attendance_id}", response_model=Envelope, tags=_TAGS)
def delete_attendance(
    attendance_id: UUID,
    use_case: DeleteAttendanceUseCase = Depends(get_delete_attendance_use_case),
    _staff: Identity = Depends(require_staff()),
):
    unwrap(use_case.execute(attendance_id))
    return success("Registro de asistencia eliminado exitosamente")
