"""
File management services package.

- Object store adapters (S3, local filesystem)
- Upload validation
- Signed URL access to stored files
"""
from app.services.file_management.file_service import FileAccess, FileService
from app.services.file_management.object_storage import (
    LocalObjectStore,
    ObjectStore,
    S3ObjectStore,
    build_object_store,
)
from app.services.file_management.upload import (
    UploadedFile,
    generate_object_key,
    validate_upload,
)

__all__ = [
    "FileAccess",
    "FileService",
    "LocalObjectStore",
    "ObjectStore",
    "S3ObjectStore",
    "build_object_store",
    "UploadedFile",
    "generate_object_key",
    "validate_upload",
]
