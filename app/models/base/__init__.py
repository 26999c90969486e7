"""
Base models package.

Provides the declarative base, abstract base classes and enums for all
database models.
"""

from app.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
    enum_type,
    utcnow,
)

from app.models.base.enums import (
    AttendanceStatus,
    GrievanceCategory,
    GrievancePriority,
    GrievanceStatus,
    LeaveStatus,
    LeaveType,
    RelatedEntityType,
    TransferStatus,
    UserRole,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "enum_type",
    "utcnow",
    "AttendanceStatus",
    "GrievanceCategory",
    "GrievancePriority",
    "GrievanceStatus",
    "LeaveStatus",
    "LeaveType",
    "RelatedEntityType",
    "TransferStatus",
    "UserRole",
]
