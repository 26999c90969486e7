"""
Grievance repository.
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.base.enums import GrievanceCategory, GrievancePriority, GrievanceStatus
from app.models.grievance.grievance import Grievance, priority_rank
from app.repositories.base.base_repository import BaseRepository


@dataclass(frozen=True)
class GrievanceFilter:
    """
    Criteria for listing grievances.

    ``by_priority`` orders by priority rank (urgent first) before recency;
    otherwise the order is recency only.
    """

    user_id: Optional[str] = None
    status: Optional[GrievanceStatus] = None
    category: Optional[GrievanceCategory] = None
    priority: Optional[GrievancePriority] = None
    by_priority: bool = False
    limit: Optional[int] = None


class GrievanceRepository(BaseRepository[Grievance]):
    """Repository for grievances."""

    def __init__(self, session: Session):
        super().__init__(Grievance, session)

    def list_grievances(self, criteria: GrievanceFilter) -> List[Grievance]:
        stmt = select(Grievance)
        if criteria.user_id is not None:
            stmt = stmt.where(Grievance.user_id == criteria.user_id)
        if criteria.status is not None:
            stmt = stmt.where(Grievance.status == criteria.status)
        if criteria.category is not None:
            stmt = stmt.where(Grievance.category == criteria.category)
        if criteria.priority is not None:
            stmt = stmt.where(Grievance.priority == criteria.priority)

        if criteria.by_priority:
            stmt = stmt.order_by(priority_rank().desc(), Grievance.created_at.desc())
        else:
            stmt = stmt.order_by(Grievance.created_at.desc())
        return self.fetch_all(stmt, limit=criteria.limit)
