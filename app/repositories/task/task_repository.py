"""
Task repository.
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.task.task import Task
from app.repositories.base.base_repository import BaseRepository


@dataclass(frozen=True)
class TaskFilter:
    """Criteria for listing tasks. ``owner_id=None`` means every owner."""

    owner_id: Optional[str] = None


class TaskRepository(BaseRepository[Task]):
    """Repository for tasks."""

    def __init__(self, session: Session):
        super().__init__(Task, session)

    def list_tasks(self, criteria: TaskFilter) -> List[Task]:
        """Tasks matching ``criteria``, newest first."""
        stmt = select(Task)
        if criteria.owner_id is not None:
            stmt = stmt.where(Task.owner_id == criteria.owner_id)
        stmt = stmt.order_by(Task.created_at.desc())
        return self.fetch_all(stmt)
