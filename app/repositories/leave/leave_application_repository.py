"""
Leave application repository.

Provides the overlap query backing the no-overlap rule and the filtered
listing used by the leave service.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.base.enums import LeaveStatus
from app.models.leave.leave_application import LeaveApplication
from app.models.user.user import User
from app.repositories.base.base_repository import BaseRepository


@dataclass(frozen=True)
class LeaveFilter:
    """
    Criteria for listing leave applications.

    ``department`` matches the department of the applicant at query time.
    """

    user_id: Optional[str] = None
    status: Optional[LeaveStatus] = None
    department: Optional[str] = None
    limit: Optional[int] = None


class LeaveApplicationRepository(BaseRepository[LeaveApplication]):
    """Repository for leave applications."""

    def __init__(self, session: Session):
        super().__init__(LeaveApplication, session)

    def find_overlapping(
        self,
        user_id: str,
        from_date: date,
        to_date: date,
    ) -> Optional[LeaveApplication]:
        """
        First non-rejected leave of ``user_id`` whose inclusive range
        intersects [from_date, to_date].
        """
        stmt = select(LeaveApplication).where(
            LeaveApplication.user_id == user_id,
            LeaveApplication.status != LeaveStatus.REJECTED,
            LeaveApplication.from_date <= to_date,
            LeaveApplication.to_date >= from_date,
        )
        return self._scalar(stmt)

    def list_leaves(self, criteria: LeaveFilter) -> List[LeaveApplication]:
        """Leaves matching ``criteria``, newest first."""
        stmt = select(LeaveApplication)
        if criteria.user_id is not None:
            stmt = stmt.where(LeaveApplication.user_id == criteria.user_id)
        if criteria.status is not None:
            stmt = stmt.where(LeaveApplication.status == criteria.status)
        if criteria.department is not None:
            stmt = stmt.join(User, User.id == LeaveApplication.user_id).where(
                User.department == criteria.department
            )
        stmt = stmt.order_by(LeaveApplication.created_at.desc())
        return self.fetch_all(stmt, limit=criteria.limit)
