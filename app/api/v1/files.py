"""
File endpoints: own uploads and signed download URLs.
"""

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.core.security.permissions import Actor
from app.schemas.common import SuccessResponse
from app.schemas.file import FileAccessData, FileAccessMeta, FileListData, FileMetaResponse
from app.services.file_management import FileService

router = APIRouter(prefix="/files")


@router.get("/my", response_model=SuccessResponse[FileListData])
def my_files(
    limit: int = Query(20, ge=1, le=100),
    actor: Actor = Depends(deps.get_current_actor),
    service: FileService = Depends(deps.get_file_service),
):
    files = service.list_mine(actor, limit=limit).unwrap()
    return SuccessResponse.create(
        data=FileListData(files=[FileMetaResponse.model_validate(f) for f in files], count=len(files))
    )


@router.get("/{object_key}", response_model=SuccessResponse[FileAccessData])
def get_file_url(
    object_key: str,
    actor: Actor = Depends(deps.get_current_actor),
    service: FileService = Depends(deps.get_file_service),
):
    access = service.get_access(actor, object_key).unwrap()
    return SuccessResponse.create(
        data=FileAccessData(
            url=access.url,
            expires_in_seconds=access.expires_in_seconds,
            file_meta=FileAccessMeta(
                file_name=access.file.original_name,
                mime_type=access.file.mime_type,
                size=access.file.size,
                uploaded_at=access.file.created_at,
            ),
        )
    )
