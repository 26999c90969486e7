"""
Attendance service.

Write-once daily marks: one record per user per calendar day, never
updated or overwritten.
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from app.core.exceptions import EntityAlreadyExistsError, RepositoryError
from app.core.security.permissions import Action, Actor, has_capability
from app.models.attendance.attendance_record import AttendanceRecord
from app.models.base.base_model import utcnow
from app.repositories.attendance import AttendanceFilter, AttendanceRecordRepository
from app.schemas.attendance import AttendanceMarkRequest
from app.services.base import BaseService, ServiceResult

logger = logging.getLogger(__name__)

ALREADY_MARKED = "Attendance already marked for this date"


def normalize_day(value: Optional[Union[datetime, date]]) -> date:
    """Strip time of day; ``None`` means today (UTC)."""
    if value is None:
        return utcnow().date()
    if isinstance(value, datetime):
        return value.date()
    return value


class AttendanceService(BaseService[AttendanceRecord, AttendanceRecordRepository]):
    """
    Service for marking and reading attendance.
    """

    resource_name = "Attendance record"

    def __init__(self, repository: AttendanceRecordRepository, db_session: Session):
        """
        Initialize attendance service.

        Args:
            repository: AttendanceRecordRepository instance
            db_session: SQLAlchemy database session
        """
        super().__init__(repository, db_session)

    def mark(self, actor: Actor, request: AttendanceMarkRequest) -> ServiceResult[AttendanceRecord]:
        """
        Record the caller's attendance for a day.

        Args:
            actor: Employee marking attendance
            request: Status, optional date/datetime and remarks

        Returns:
            ServiceResult with the record, or CONFLICT if the day is taken
        """
        day = normalize_day(request.date)

        if self.repository.find_for_user_on(actor.id, day) is not None:
            return ServiceResult.conflict(ALREADY_MARKED, details={"date": day.isoformat()})

        record = AttendanceRecord(
            user_id=actor.id,
            date=day,
            status=request.status,
            remarks=request.remarks,
            timestamp=utcnow(),
        )
        try:
            with self.transaction():
                self.repository.create(record)
        except EntityAlreadyExistsError:
            return ServiceResult.conflict(ALREADY_MARKED, details={"date": day.isoformat()})
        except RepositoryError as e:
            return self._handle_exception(e, "mark attendance", actor.id)

        logger.info(
            "Attendance marked",
            extra={"user_id": actor.id, "date": day.isoformat(), "status": record.status.value},
        )
        return ServiceResult.success(record, message="Attendance marked successfully")

    def list_mine(
        self,
        actor: Actor,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 30,
    ) -> ServiceResult[List[AttendanceRecord]]:
        try:
            records = self.repository.list_attendance(
                AttendanceFilter(
                    user_id=actor.id,
                    start_date=start_date,
                    end_date=end_date,
                    limit=limit,
                )
            )
        except RepositoryError as e:
            return self._handle_exception(e, "list attendance", actor.id)
        return ServiceResult.success(records)

    def list_all(
        self,
        actor: Actor,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        user_id: Optional[str] = None,
        department: Optional[str] = None,
        limit: int = 100,
    ) -> ServiceResult[List[AttendanceRecord]]:
        """
        Attendance across users.

        Records carry no department, so the department filter is applied to
        the loaded user after the query, before the limit.
        """
        if not has_capability(actor, Action.LIST_ATTENDANCE):
            return ServiceResult.forbidden("Not authorized to view attendance records")

        try:
            records = self.repository.list_attendance(
                AttendanceFilter(
                    user_id=user_id,
                    start_date=start_date,
                    end_date=end_date,
                    limit=None if department else limit,
                )
            )
        except RepositoryError as e:
            return self._handle_exception(e, "list attendance")

        if department:
            records = [r for r in records if r.user.department == department]
        return ServiceResult.success(records[:limit])
