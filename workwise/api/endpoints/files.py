"""
File upload endpoints (profile images, CVs and generic attachments).

Validation errors come back as `{"detail": {"message", "code"}}` with the
status code the error code maps to (413 for FILE_TOO_LARGE, 400 otherwise).
"""

import logging
from typing import Optional
from fastapi import APIRouter, UploadFile, File, Form, Depends, HTTPException
from sqlalchemy.orm import Session

from workwise.core.database import get_db
from workwise.core.storage import StorageBackend, storage
from workwise.crud import user_file as user_file_crud
from workwise.models.user_file import FileType
from workwise.schemas.file import (
    FileDeletedData,
    FileDeletedResponse,
    FileUrlData,
    FileUrlResponse,
    UserFileData,
    UserFileListResponse,
    UserFileResponse,
)
from workwise.services.upload_service import FileUploadError, delete_upload, store_upload

router = APIRouter(prefix="/files", tags=["Files"])
logger = logging.getLogger(__name__)


def get_file_storage() -> StorageBackend:
    """Storage backend dependency (overridden in tests)."""
    return storage


async def _store(
    db: Session,
    backend: StorageBackend,
    file: UploadFile,
    user_id: Optional[str],
    file_type: str,
):
    content = await file.read()
    try:
        return store_upload(
            db,
            backend,
            user_id=user_id,
            filename=file.filename,
            content_type=file.content_type,
            content=content,
            file_type=file_type,
        )
    except FileUploadError as e:
        logger.warning(f"Rejected {file_type} upload for user {user_id}: {e.code} {e.message}")
        raise HTTPException(status_code=e.status_code, detail={"message": e.message, "code": e.code})


@router.post("/upload-profile-image", response_model=FileUrlResponse)
async def upload_profile_image(
    file: UploadFile = File(...),
    user_id: Optional[str] = Form(None, alias="userId"),
    db: Session = Depends(get_db),
    backend: StorageBackend = Depends(get_file_storage),
):
    """Upload a profile picture (JPEG, PNG or WebP, up to 5MB)."""
    user_file = await _store(db, backend, file, user_id, FileType.PROFILE_IMAGE.value)
    return FileUrlResponse(data=FileUrlData(file_url=user_file.file_url))


@router.post("/upload-cv", response_model=FileUrlResponse)
async def upload_cv(
    file: UploadFile = File(...),
    user_id: Optional[str] = Form(None, alias="userId"),
    db: Session = Depends(get_db),
    backend: StorageBackend = Depends(get_file_storage),
):
    """Upload a CV (PDF, DOC or DOCX, up to 10MB)."""
    user_file = await _store(db, backend, file, user_id, FileType.CV.value)
    return FileUrlResponse(data=FileUrlData(file_url=user_file.file_url))


@router.post("/upload", response_model=UserFileResponse)
async def upload_file(
    file: UploadFile = File(...),
    user_id: Optional[str] = Form(None, alias="userId"),
    file_type: str = Form("document", alias="fileType"),
    db: Session = Depends(get_db),
    backend: StorageBackend = Depends(get_file_storage),
):
    """
    Generic upload. Known file types ("profile-image", "cv") use their own
    rules; anything else is only size-capped.
    """
    user_file = await _store(db, backend, file, user_id, file_type)
    return UserFileResponse(data=UserFileData.model_validate(user_file))


@router.get("/user/{user_id}", response_model=UserFileListResponse)
def list_user_files(user_id: str, db: Session = Depends(get_db)):
    files = user_file_crud.get_by_user(db, user_id)
    return UserFileListResponse(data=[UserFileData.model_validate(f) for f in files])


@router.delete("/{file_id}", response_model=FileDeletedResponse)
def delete_file(
    file_id: int,
    db: Session = Depends(get_db),
    backend: StorageBackend = Depends(get_file_storage),
):
    user_file = user_file_crud.get_by_id(db, file_id)
    if not user_file:
        raise HTTPException(status_code=404, detail="File not found")

    delete_upload(db, backend, user_file)
    return FileDeletedResponse(data=FileDeletedData(deleted=True))
