"""
Leave services package.
"""
from app.services.leave.leave_application_service import LeaveApplicationService

__all__ = ["LeaveApplicationService"]
