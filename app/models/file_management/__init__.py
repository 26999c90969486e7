"""
File management models package.
"""
from app.models.file_management.file_metadata import FileMeta

__all__ = ["FileMeta"]
