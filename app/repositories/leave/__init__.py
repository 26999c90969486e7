"""
Leave repositories package.
"""
from app.repositories.leave.leave_application_repository import (
    LeaveApplicationRepository,
    LeaveFilter,
)

__all__ = ["LeaveApplicationRepository", "LeaveFilter"]
