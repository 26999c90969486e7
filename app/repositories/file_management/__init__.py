"""
File management repositories package.
"""
from app.repositories.file_management.file_metadata_repository import FileMetadataRepository

__all__ = ["FileMetadataRepository"]
