"""
Uploaded file value object and validation.
"""

import uuid
from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterable, Optional


@dataclass(frozen=True)
class UploadedFile:
    """File received from the client, fully read into memory."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return PurePath(self.filename or "").suffix.lower()


def validate_upload(
    upload: UploadedFile,
    allowed_mime_types: Iterable[str],
    max_size: int,
) -> Optional[str]:
    """Return an error message when the upload is unacceptable, else None."""
    if upload.content_type not in set(allowed_mime_types):
        return "Invalid file type. Only PDF, JPEG, and PNG files are allowed."
    if upload.size == 0:
        return "Uploaded file is empty"
    if upload.size > max_size:
        return f"File too large. Maximum size is {max_size // (1024 * 1024)}MB."
    return None


def generate_object_key(upload: UploadedFile) -> str:
    return f"{uuid.uuid4()}{upload.extension}"
