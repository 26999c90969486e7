"""File schemas."""
from app.schemas.file.file_response import (
    FileAccessData,
    FileAccessMeta,
    FileListData,
    FileMetaResponse,
)

__all__ = ["FileMetaResponse", "FileListData", "FileAccessData", "FileAccessMeta"]
