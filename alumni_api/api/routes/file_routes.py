"""
File Routes

POST /files/{kind}/upload - Upload a photo (JPEG/PNG, 1MB) or certificate (PDF, 2MB)
GET /files/{kind}/{alumni_id} - Latest file of that kind for an alumni
DELETE /files/{kind}/{id} - Delete a file (uploader or admin)

kind is "photo" or "certificate". Uploads are multipart with a ``file``
part and an ``alumni_id`` form field.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from alumni_api.api.deps import get_file_service
from alumni_api.core.auth import get_current_user
from alumni_api.schemas.schemas import (
    CurrentUser, DataResponse, FileAssetResponse, FileKind, MessageResponse
)
from alumni_api.services.file_service import FileService
from alumni_api.utils.file_upload import read_upload

router = APIRouter(prefix="/files", tags=["Files"])


@router.post("/{kind}/upload", response_model=DataResponse[FileAssetResponse], status_code=201)
def upload_file(
    kind: FileKind,
    file: Optional[UploadFile] = File(None),
    alumni_id: str = Form(""),
    user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    # sync route: read the spooled file directly, never past the size limit
    content = read_upload(file.file, kind) if file is not None else None
    asset = service.upload(
        kind,
        file.filename if file is not None else None,
        file.content_type if file is not None else None,
        content,
        alumni_id,
        user,
    )
    return DataResponse(message=f"{kind.value.capitalize()} uploaded", data=asset)


@router.get("/{kind}/{alumni_id}", response_model=DataResponse[FileAssetResponse])
def get_file(
    kind: FileKind,
    alumni_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    return DataResponse(data=service.get_by_alumni_id(kind, alumni_id))


@router.delete("/{kind}/{file_id}", response_model=MessageResponse)
def delete_file(
    kind: FileKind,
    file_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    service.delete(kind, file_id, user)
    return MessageResponse(message=f"{kind.value.capitalize()} deleted")
