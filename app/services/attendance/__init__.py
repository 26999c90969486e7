"""
Attendance services package.
"""
from app.services.attendance.attendance_service import AttendanceService, normalize_day

__all__ = ["AttendanceService", "normalize_day"]
