from .attendance import PostgresAttendanceRepository
from .camp import PostgresCampRepository
from .department import PostgresDepartmentRepository
from .position import PostgresPositionRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresAttendanceRepository",
    "PostgresDepartmentRepository",
    "PostgresPositionRepository",
    "PostgresCampRepository",
]
