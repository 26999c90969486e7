"""
Database models package.

Importing this package registers every mapped class with ``Base.metadata``.
"""

from app.models.base import Base, BaseModel, TimestampModel
from app.models.user import User
from app.models.task import Task
from app.models.leave import LeaveApplication
from app.models.transfer import TransferRequest
from app.models.grievance import Grievance
from app.models.attendance import AttendanceRecord
from app.models.file_management import FileMeta

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "User",
    "Task",
    "LeaveApplication",
    "TransferRequest",
    "Grievance",
    "AttendanceRecord",
    "FileMeta",
]
