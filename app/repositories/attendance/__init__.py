"""
Attendance repositories package.
"""
from app.repositories.attendance.attendance_record_repository import (
    AttendanceFilter,
    AttendanceRecordRepository,
)

__all__ = ["AttendanceFilter", "AttendanceRecordRepository"]
