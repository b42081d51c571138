from .attendance import InMemoryAttendanceRepository
from .camp import InMemoryCampRepository
from .department import InMemoryDepartmentRepository
from .position import InMemoryPositionRepository
from .store import InMemoryStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryStore",
    "InMemoryUserRepository",
    "InMemoryAttendanceRepository",
    "InMemoryDepartmentRepository",
    "InMemoryPositionRepository",
    "InMemoryCampRepository",
]
