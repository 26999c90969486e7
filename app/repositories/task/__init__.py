"""Task repositories."""
from app.repositories.task.task_repository import TaskFilter, TaskRepository

__all__ = ["TaskFilter", "TaskRepository"]
