"""Task schemas."""
from app.schemas.task.task import TaskCreate, TaskListData, TaskResponse, TaskUpdate

__all__ = ["TaskCreate", "TaskUpdate", "TaskResponse", "TaskListData"]
