"""Attendance schemas."""
from app.schemas.attendance.attendance_record import (
    AttendanceListData,
    AttendanceMarkRequest,
    AttendanceResponse,
)

__all__ = ["AttendanceMarkRequest", "AttendanceResponse", "AttendanceListData"]
