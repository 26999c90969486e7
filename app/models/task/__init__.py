"""Task models."""
from app.models.task.task import Task

__all__ = ["Task"]
