"""
Object storage adapters for uploaded attachments.

Two providers:
- S3 (or any S3-compatible endpoint) through boto3
- Local filesystem, used in development and tests

Both raise ``StorageError`` on failure so callers handle a single type.
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Protocol
from urllib.parse import urlencode

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config.settings import StorageSettings
from app.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Minimal contract the grievance and file services rely on."""

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``key`` and return its canonical URL."""

    def exists(self, key: str) -> bool:
        ...

    def signed_url(self, key: str, expires_in: int) -> str:
        """Time-limited read URL for ``key``."""

    def delete(self, key: str) -> None:
        ...


class S3ObjectStore:
    """S3 backed store. Objects are private; reads go through presigned URLs."""

    def __init__(self, storage_settings: StorageSettings, client=None):
        if not storage_settings.bucket:
            raise ValueError("S3_BUCKET is required when STORAGE_PROVIDER is 's3'")
        self.bucket = storage_settings.bucket
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=storage_settings.access_key_id,
            aws_secret_access_key=storage_settings.secret_access_key,
            region_name=storage_settings.region,
            endpoint_url=storage_settings.endpoint_url,
        )

    def put(self, key: str, data: bytes, content_type: str) -> str:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 upload failed for {key}: {e}")
            raise StorageError(f"Upload failed: {e}") from e
        return f"s3://{self.bucket}/{key}"

    def exists(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in ("404", "NoSuchKey", "NotFound"):
                return False
            raise StorageError(f"Lookup failed: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Lookup failed: {e}") from e

    def signed_url(self, key: str, expires_in: int) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Could not sign URL: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Delete failed: {e}") from e


class LocalObjectStore:
    """
    Filesystem store rooted at ``upload_dir``.

    Signed URLs are ``file://`` URIs carrying an ``expires`` query parameter;
    they are meant for local development, not for serving to browsers.
    """

    def __init__(self, upload_dir: str):
        self.root = Path(upload_dir)

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise StorageError(f"Invalid object key: {key}")
        return path

    def put(self, key: str, data: bytes, content_type: str) -> str:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Upload failed: {e}") from e
        return path.as_uri()

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def signed_url(self, key: str, expires_in: int) -> str:
        expires = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        query = urlencode({"expires": int(expires.timestamp())})
        return f"{self._path(key).as_uri()}?{query}"

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Delete failed: {e}") from e


def build_object_store(storage_settings: StorageSettings) -> ObjectStore:
    """Create the store selected by ``STORAGE_PROVIDER``."""
    if storage_settings.provider == "s3":
        return S3ObjectStore(storage_settings)
    return LocalObjectStore(storage_settings.upload_dir)
