"""
File storage abstraction layer supporting both local filesystem and AWS S3.

This module provides a unified interface for user uploads (profile images,
CVs, other documents), allowing seamless switching between local storage
(for development) and S3 (for production).
"""

import logging
import os
import re
import uuid
from typing import BinaryIO, Optional
import boto3
from botocore.exceptions import ClientError
from workwise.core.config import settings

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    'pdf': 'application/pdf',
    'docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'doc': 'application/msword',
    'txt': 'text/plain',
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'png': 'image/png',
    'webp': 'image/webp',
}


class StorageError(Exception):
    """Raised when a storage backend cannot complete an operation."""
    pass


def safe_filename(filename: Optional[str]) -> str:
    """Strip directories and unsafe characters from a client-supplied name."""
    name = os.path.basename((filename or "").replace("\\", "/"))
    name = re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("._")
    return name or "file"


def guess_content_type(filename: str) -> str:
    """Determine content type based on file extension"""
    extension = filename.lower().rsplit('.', 1)[-1] if '.' in filename else ''
    return CONTENT_TYPES.get(extension, 'application/octet-stream')


class StorageBackend:
    """Abstract base class for storage backends"""

    def upload_file(self, file: BinaryIO, filename: str, folder: str = "files", content_type: Optional[str] = None) -> str:
        """Upload file and return its storage path"""
        raise NotImplementedError

    def delete_file(self, file_path: str) -> bool:
        """Delete file from storage"""
        raise NotImplementedError

    def file_exists(self, file_path: str) -> bool:
        """Check if file exists"""
        raise NotImplementedError

    def get_url(self, file_path: str) -> str:
        """Public URL clients use to fetch the file"""
        raise NotImplementedError

    def health_check(self) -> None:
        """Raise if the backend is unusable"""
        raise NotImplementedError


class LocalStorage(StorageBackend):
    """Local filesystem storage backend, served under FILES_URL_PREFIX"""

    def __init__(self, base_dir: str = "uploads", url_prefix: str = "/files"):
        self.base_dir = base_dir
        self.url_prefix = url_prefix.rstrip("/")
        os.makedirs(self.base_dir, exist_ok=True)

    def upload_file(self, file: BinaryIO, filename: str, folder: str = "files", content_type: Optional[str] = None) -> str:
        """Save file under uploads/<folder>/ and return the relative key"""
        # Generate unique filename to prevent collisions
        key = f"{folder}/{uuid.uuid4()}_{safe_filename(filename)}"
        file_path = self._full_path(key)
        os.makedirs(os.path.dirname(file_path), exist_ok=True)

        with open(file_path, "wb") as buffer:
            buffer.write(file.read())

        return key

    def delete_file(self, file_path: str) -> bool:
        full_path = self._full_path(file_path)
        try:
            if os.path.exists(full_path):
                os.remove(full_path)
                return True
            return False
        except OSError as e:
            logger.error(f"Error deleting file {file_path}: {e}")
            return False

    def file_exists(self, file_path: str) -> bool:
        return os.path.exists(self._full_path(file_path))

    def get_url(self, file_path: str) -> str:
        return f"{self.url_prefix}/{file_path}"

    def health_check(self) -> None:
        if not os.access(self.base_dir, os.W_OK):
            raise StorageError(f"Upload directory {self.base_dir} is not writable")

    def _full_path(self, key: str) -> str:
        full_path = os.path.abspath(os.path.join(self.base_dir, key))
        # Keys must stay inside the upload directory
        if not full_path.startswith(os.path.abspath(self.base_dir) + os.sep):
            raise StorageError(f"Invalid storage key: {key}")
        return full_path


class S3Storage(StorageBackend):
    """AWS S3 storage backend"""

    def __init__(self):
        self.bucket_name = settings.S3_BUCKET_NAME
        self.region = settings.AWS_REGION

        # If AWS_ACCESS_KEY_ID is not set, boto3 will use IAM roles (for EC2/ECS)
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            self.s3_client = boto3.client(
                's3',
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=self.region
            )
        else:
            self.s3_client = boto3.client('s3', region_name=self.region)

    def upload_file(self, file: BinaryIO, filename: str, folder: str = "files", content_type: Optional[str] = None) -> str:
        """Upload file to S3 and return its s3:// URI"""
        name = safe_filename(filename)
        s3_key = f"{folder}/{uuid.uuid4()}_{name}"

        try:
            self.s3_client.upload_fileobj(
                file,
                self.bucket_name,
                s3_key,
                ExtraArgs={
                    'ContentType': content_type or guess_content_type(name),
                    'ServerSideEncryption': 'AES256'  # Enable encryption at rest
                }
            )
            return f"s3://{self.bucket_name}/{s3_key}"

        except ClientError as e:
            logger.error(f"Error uploading to S3: {e}")
            raise StorageError(f"Failed to upload file to S3: {e}")

    def delete_file(self, file_path: str) -> bool:
        s3_key = self._parse_s3_uri(file_path)

        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=s3_key)
            return True
        except ClientError as e:
            logger.error(f"Error deleting from S3: {e}")
            return False

    def file_exists(self, file_path: str) -> bool:
        s3_key = self._parse_s3_uri(file_path)

        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=s3_key)
            return True
        except ClientError:
            return False

    def get_url(self, file_path: str) -> str:
        s3_key = self._parse_s3_uri(file_path)
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{s3_key}"

    def health_check(self) -> None:
        # Validates credentials and bucket access
        self.s3_client.list_objects_v2(Bucket=self.bucket_name, MaxKeys=1)

    def _parse_s3_uri(self, s3_uri: str) -> str:
        """Parse S3 URI and extract key

        Supports formats:
        - s3://bucket-name/key/path
        - cv/uuid_filename.pdf (assumes default bucket)
        """
        if s3_uri.startswith("s3://"):
            parts = s3_uri.replace("s3://", "").split("/", 1)
            if len(parts) == 2:
                return parts[1]
            raise ValueError(f"Invalid S3 URI format: {s3_uri}")
        return s3_uri


# Storage factory - returns appropriate backend based on settings
def get_storage() -> StorageBackend:
    """Get storage backend based on USE_S3 setting"""
    if settings.USE_S3:
        if not settings.S3_BUCKET_NAME:
            raise ValueError("S3_BUCKET_NAME must be set when USE_S3=True")
        return S3Storage()
    return LocalStorage(settings.UPLOAD_DIR, settings.FILES_URL_PREFIX)


# Singleton instance
storage = get_storage()
