"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions that match
the Pydantic schema enums for consistency.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    EMPLOYEE = "employee"
    HR = "hr"
    DEPARTMENT_HEAD = "department_head"
    ADMIN = "admin"


class LeaveType(str, enum.Enum):
    """Leave type categorization."""
    SICK = "sick"
    CASUAL = "casual"
    EARNED = "earned"
    MATERNITY = "maternity"
    PATERNITY = "paternity"
    UNPAID = "unpaid"


class LeaveStatus(str, enum.Enum):
    """Leave application status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TransferStatus(str, enum.Enum):
    """Department transfer request status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class GrievanceStatus(str, enum.Enum):
    """Grievance lifecycle status. CLOSED is terminal."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class GrievanceCategory(str, enum.Enum):
    """Grievance category."""
    HARASSMENT = "harassment"
    DISCRIMINATION = "discrimination"
    WORKPLACE_SAFETY = "workplace_safety"
    SALARY = "salary"
    BENEFITS = "benefits"
    MANAGEMENT = "management"
    OTHER = "other"


class GrievancePriority(str, enum.Enum):
    """Grievance priority, declared from lowest to highest."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return list(GrievancePriority).index(self)


class AttendanceStatus(str, enum.Enum):
    """Daily attendance status."""
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    WFH = "WFH"


class RelatedEntityType(str, enum.Enum):
    """Kind of record an uploaded file is attached to."""
    GRIEVANCE = "grievance"
    LEAVE = "leave"
    TRANSFER = "transfer"
    OTHER = "other"
