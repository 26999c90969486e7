"""
Task service: personal task tracking.

Handles:
- Create (owner is the caller)
- List (admins see every task, everyone else their own)
- Get / delete (owner or admin)
- Update (owner only)
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import RepositoryError
from app.core.security.permissions import Action, Actor, can_access, has_capability
from app.models.task.task import Task
from app.repositories.task import TaskFilter, TaskRepository
from app.schemas.task import TaskCreate, TaskUpdate
from app.services.base import BaseService, ServiceResult

logger = logging.getLogger(__name__)


class TaskService(BaseService[Task, TaskRepository]):
    """
    Service for task CRUD with ownership checks.
    """

    resource_name = "Task"

    def __init__(self, repository: TaskRepository, db_session: Session):
        super().__init__(repository, db_session)

    def create_task(self, actor: Actor, request: TaskCreate) -> ServiceResult[Task]:
        task = Task(title=request.title, description=request.description, owner_id=actor.id)
        try:
            with self.transaction():
                self.repository.create(task)
        except RepositoryError as e:
            return self._handle_exception(e, "create task")

        logger.info("Task created", extra={"task_id": task.id, "user_id": actor.id})
        return ServiceResult.success(task, message="Task created successfully")

    def list_tasks(self, actor: Actor) -> ServiceResult[List[Task]]:
        owner_id = None if has_capability(actor, Action.LIST_TASKS) else actor.id
        try:
            tasks = self.repository.list_tasks(TaskFilter(owner_id=owner_id))
        except RepositoryError as e:
            return self._handle_exception(e, "list tasks")
        return ServiceResult.success(tasks)

    def _load_for(self, actor: Actor, task_id: str, action: Action, verb: str) -> ServiceResult[Task]:
        found = self.get_by_id(task_id)
        if not found:
            return found
        task = found.data
        if not can_access(actor, action, owner_id=task.owner_id):
            logger.warning(
                f"Task {verb} denied",
                extra={"task_id": task_id, "actor_id": actor.id},
            )
            return ServiceResult.forbidden(f"Not authorized to {verb} this task")
        return found

    def get_task(self, actor: Actor, task_id: str) -> ServiceResult[Task]:
        return self._load_for(actor, task_id, Action.READ, "access")

    def update_task(self, actor: Actor, task_id: str, request: TaskUpdate) -> ServiceResult[Task]:
        """
        Update title and/or description. Only the owner may update, even
        an admin is refused on someone else's task.
        """
        loaded = self._load_for(actor, task_id, Action.UPDATE, "update")
        if not loaded:
            return loaded
        task = loaded.data

        changes = request.model_dump(exclude_none=True)
        try:
            with self.transaction():
                for field, value in changes.items():
                    setattr(task, field, value)
                self.repository.flush()
        except RepositoryError as e:
            return self._handle_exception(e, "update task", task_id)

        logger.info("Task updated", extra={"task_id": task_id, "fields": sorted(changes)})
        return ServiceResult.success(task, message="Task updated successfully")

    def delete_task(self, actor: Actor, task_id: str) -> ServiceResult[bool]:
        loaded = self._load_for(actor, task_id, Action.DELETE, "delete")
        if not loaded:
            return loaded
        try:
            with self.transaction():
                self.repository.delete(loaded.data)
        except RepositoryError as e:
            return self._handle_exception(e, "delete task", task_id)

        logger.info("Task deleted", extra={"task_id": task_id, "actor_id": actor.id})
        return ServiceResult.success(True, message="Task deleted successfully")
