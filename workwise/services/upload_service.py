"""
File upload validation and persistence.

Validates profile images and CVs against size/type rules, writes them to
the configured storage backend and records the upload for the user.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from workwise.core.config import settings
from workwise.core.storage import StorageBackend, safe_filename
from workwise.crud import user_file as user_file_crud
from workwise.models.user_file import FileType, UserFile

logger = logging.getLogger(__name__)

MB = 1024 * 1024


@dataclass(frozen=True)
class UploadRule:
    max_size: int
    allowed_types: Optional[Tuple[str, ...]] = None  # None accepts any type
    folder: str = "files"


VALIDATION_CONFIG = {
    FileType.PROFILE_IMAGE.value: UploadRule(
        max_size=settings.PROFILE_IMAGE_MAX_SIZE,
        allowed_types=("image/jpeg", "image/jpg", "image/png", "image/webp"),
        folder="profile-images",
    ),
    FileType.CV.value: UploadRule(
        max_size=settings.CV_MAX_SIZE,
        allowed_types=(
            "application/pdf",
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ),
        folder="cvs",
    ),
}

GENERIC_RULE = UploadRule(max_size=settings.GENERIC_FILE_MAX_SIZE, folder="files")


class FileUploadError(Exception):
    """
    Upload rejected or failed.

    `code` is a stable identifier the client maps to a message
    (FILE_TOO_LARGE, INVALID_FILE_TYPE, MISSING_USER_ID, EMPTY_FILE,
    STORAGE_ERROR).
    """

    STATUS_CODES = {
        "FILE_TOO_LARGE": 413,
        "INVALID_FILE_TYPE": 400,
        "MISSING_USER_ID": 400,
        "EMPTY_FILE": 400,
        "STORAGE_ERROR": 500,
    }

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.message = message
        self.code = code

    @property
    def status_code(self) -> int:
        return self.STATUS_CODES.get(self.code, 400)


def rule_for(file_type: str) -> UploadRule:
    return VALIDATION_CONFIG.get(file_type, GENERIC_RULE)


def validate_file(content: bytes, content_type: Optional[str], rule: UploadRule) -> None:
    """
    Check size and MIME type against an upload rule.

    Raises:
        FileUploadError: EMPTY_FILE, FILE_TOO_LARGE or INVALID_FILE_TYPE
    """
    if not content:
        raise FileUploadError("Uploaded file is empty", "EMPTY_FILE")

    if len(content) > rule.max_size:
        raise FileUploadError(
            f"File size exceeds {round(rule.max_size / MB)}MB limit",
            "FILE_TOO_LARGE",
        )

    if rule.allowed_types is not None and content_type not in rule.allowed_types:
        raise FileUploadError(
            f"File type not supported. Allowed types: {', '.join(rule.allowed_types)}",
            "INVALID_FILE_TYPE",
        )


def store_upload(
    db: Session,
    backend: StorageBackend,
    user_id: Optional[str],
    filename: Optional[str],
    content_type: Optional[str],
    content: bytes,
    file_type: str,
) -> UserFile:
    """
    Validate, store and record one upload.

    Args:
        db: Database session
        backend: Storage backend to write to
        user_id: Owner id (required)
        filename: Client filename (sanitized before storage)
        content_type: MIME type reported by the client
        content: File bytes
        file_type: "profile-image", "cv" or any free-form type

    Returns:
        The recorded UserFile

    Raises:
        FileUploadError: On validation or storage failure
    """
    if not user_id or not user_id.strip():
        raise FileUploadError("User ID is required", "MISSING_USER_ID")

    rule = rule_for(file_type)
    validate_file(content, content_type, rule)

    name = safe_filename(filename)
    try:
        storage_path = backend.upload_file(
            BytesIO(content),
            name,
            folder=f"{rule.folder}/{safe_filename(user_id)}",
            content_type=content_type,
        )
    except Exception as e:
        logger.error(f"Failed to store {file_type} for user {user_id}: {e}")
        raise FileUploadError(f"Failed to store file: {e}", "STORAGE_ERROR")

    user_file = user_file_crud.create(
        db,
        user_id=user_id,
        file_name=name,
        file_type=file_type or "unknown",
        content_type=content_type,
        size_bytes=len(content),
        storage_path=storage_path,
        file_url=backend.get_url(storage_path),
    )
    logger.info(f"Stored {file_type} upload {user_file.id} for user {user_id} ({len(content)} bytes)")
    return user_file


def delete_upload(db: Session, backend: StorageBackend, user_file: UserFile) -> None:
    """Remove the stored object (best effort) and the upload record."""
    file_id, owner = user_file.id, user_file.user_id

    if not backend.delete_file(user_file.storage_path):
        logger.warning(f"Stored object for file {file_id} was already missing: {user_file.storage_path}")
    user_file_crud.delete(db, user_file)
    logger.info(f"Deleted file {file_id} for user {owner}")
