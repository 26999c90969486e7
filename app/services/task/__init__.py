"""Task services."""
from app.services.task.task_service import TaskService

__all__ = ["TaskService"]
