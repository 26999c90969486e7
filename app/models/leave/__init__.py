"""
Leave models package.
"""
from app.models.leave.leave_application import LeaveApplication

__all__ = ["LeaveApplication"]
