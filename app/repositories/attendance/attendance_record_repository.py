"""
Attendance record repository.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.attendance.attendance_record import AttendanceRecord
from app.repositories.base.base_repository import BaseRepository


@dataclass(frozen=True)
class AttendanceFilter:
    """Criteria for listing attendance. Date bounds are inclusive."""

    user_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    limit: Optional[int] = None


class AttendanceRecordRepository(BaseRepository[AttendanceRecord]):
    """
    Repository for attendance record operations.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy database session
        """
        super().__init__(AttendanceRecord, session)

    def find_for_user_on(self, user_id: str, day: date) -> Optional[AttendanceRecord]:
        stmt = select(AttendanceRecord).where(
            AttendanceRecord.user_id == user_id,
            AttendanceRecord.date == day,
        )
        return self._scalar(stmt)

    def list_attendance(self, criteria: AttendanceFilter) -> List[AttendanceRecord]:
        """Records matching ``criteria``, most recent day first."""
        stmt = select(AttendanceRecord)
        if criteria.user_id is not None:
            stmt = stmt.where(AttendanceRecord.user_id == criteria.user_id)
        if criteria.start_date is not None:
            stmt = stmt.where(AttendanceRecord.date >= criteria.start_date)
        if criteria.end_date is not None:
            stmt = stmt.where(AttendanceRecord.date <= criteria.end_date)
        stmt = stmt.order_by(AttendanceRecord.date.desc(), AttendanceRecord.created_at.desc())
        return self.fetch_all(stmt, limit=criteria.limit)
