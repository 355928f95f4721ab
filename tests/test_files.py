"""
Tests for file upload validation, storage and the files API.
"""

import os
from unittest.mock import MagicMock

import pytest

from workwise.core import storage as storage_module
from workwise.core.storage import StorageError, safe_filename
from workwise.services.upload_service import (
    FileUploadError,
    GENERIC_RULE,
    VALIDATION_CONFIG,
    validate_file,
)

MB = 1024 * 1024
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n" + b"0" * 128


class TestValidation:
    """Tests for size and MIME type rules"""

    def test_profile_image_accepts_png(self):
        validate_file(PNG_BYTES, "image/png", VALIDATION_CONFIG["profile-image"])

    def test_profile_image_too_large(self):
        with pytest.raises(FileUploadError) as exc:
            validate_file(b"x" * (5 * MB + 1), "image/png", VALIDATION_CONFIG["profile-image"])

        assert exc.value.code == "FILE_TOO_LARGE"
        assert exc.value.status_code == 413
        assert exc.value.message == "File size exceeds 5MB limit"

    def test_cv_rejects_image(self):
        with pytest.raises(FileUploadError) as exc:
            validate_file(PNG_BYTES, "image/png", VALIDATION_CONFIG["cv"])

        assert exc.value.code == "INVALID_FILE_TYPE"
        assert exc.value.status_code == 400
        assert exc.value.message.startswith("File type not supported. Allowed types: application/pdf")

    def test_empty_file(self):
        with pytest.raises(FileUploadError) as exc:
            validate_file(b"", "application/pdf", VALIDATION_CONFIG["cv"])

        assert exc.value.code == "EMPTY_FILE"

    def test_generic_rule_accepts_any_type(self):
        validate_file(b"hello", "text/plain", GENERIC_RULE)


class TestLocalStorage:
    """Tests for the local filesystem backend"""

    def test_upload_and_delete(self, local_storage):
        from io import BytesIO

        key = local_storage.upload_file(BytesIO(b"data"), "cv.pdf", folder="cvs/u1")

        assert key.startswith("cvs/u1/")
        assert key.endswith("_cv.pdf")
        assert local_storage.file_exists(key)
        with open(os.path.join(local_storage.base_dir, key), "rb") as f:
            assert f.read() == b"data"
        assert local_storage.get_url(key) == f"/files/{key}"

        assert local_storage.delete_file(key) is True
        assert not local_storage.file_exists(key)
        assert local_storage.delete_file(key) is False

    def test_rejects_path_traversal(self, local_storage):
        with pytest.raises(StorageError):
            local_storage.file_exists("../../etc/passwd")

    def test_safe_filename(self):
        assert safe_filename("../../My CV (final).pdf") == "My_CV_final_.pdf"
        assert safe_filename(None) == "file"


class TestS3Storage:
    """Tests for the S3 backend with a mocked client"""

    @pytest.fixture
    def s3_backend(self, monkeypatch):
        s3_client = MagicMock()
        monkeypatch.setattr(storage_module.boto3, "client", lambda *args, **kwargs: s3_client)
        monkeypatch.setattr(storage_module.settings, "S3_BUCKET_NAME", "workwise-uploads")
        monkeypatch.setattr(storage_module.settings, "AWS_REGION", "af-south-1")
        return storage_module.S3Storage(), s3_client

    def test_upload_uses_reported_content_type(self, s3_backend):
        from io import BytesIO

        backend, s3_client = s3_backend

        path = backend.upload_file(BytesIO(b"data"), "scan", folder="cvs/u1", content_type="application/pdf")

        assert path.startswith("s3://workwise-uploads/cvs/u1/")
        extra_args = s3_client.upload_fileobj.call_args.kwargs["ExtraArgs"]
        assert extra_args["ContentType"] == "application/pdf"
        assert extra_args["ServerSideEncryption"] == "AES256"
        assert backend.get_url(path).startswith("https://workwise-uploads.s3.af-south-1.amazonaws.com/cvs/u1/")

    def test_upload_guesses_content_type_from_extension(self, s3_backend):
        from io import BytesIO

        backend, s3_client = s3_backend

        backend.upload_file(BytesIO(b"data"), "photo.png", folder="profile-images/u1")

        assert s3_client.upload_fileobj.call_args.kwargs["ExtraArgs"]["ContentType"] == "image/png"


class TestUploadEndpoints:
    """Tests for /api/files endpoints"""

    def test_upload_profile_image(self, client, local_storage):
        response = client.post(
            "/api/files/upload-profile-image",
            files={"file": ("me.png", PNG_BYTES, "image/png")},
            data={"userId": "uid-1"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        file_url = body["data"]["fileUrl"]
        assert file_url.startswith("/files/profile-images/uid-1/")
        assert local_storage.file_exists(file_url[len("/files/"):])

    def test_upload_cv(self, client):
        response = client.post(
            "/api/files/upload-cv",
            files={"file": ("cv.pdf", PDF_BYTES, "application/pdf")},
            data={"userId": "uid-1"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["fileUrl"].endswith("_cv.pdf")

    def test_upload_cv_wrong_type(self, client):
        response = client.post(
            "/api/files/upload-cv",
            files={"file": ("photo.png", PNG_BYTES, "image/png")},
            data={"userId": "uid-1"},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_FILE_TYPE"

    def test_upload_missing_user_id(self, client):
        response = client.post(
            "/api/files/upload-profile-image",
            files={"file": ("me.png", PNG_BYTES, "image/png")},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "MISSING_USER_ID"

    def test_upload_profile_image_too_large(self, client):
        response = client.post(
            "/api/files/upload-profile-image",
            files={"file": ("big.png", b"x" * (5 * MB + 1), "image/png")},
            data={"userId": "uid-1"},
        )

        assert response.status_code == 413
        assert response.json()["detail"]["message"] == "File size exceeds 5MB limit"

    def test_generic_upload(self, client):
        response = client.post(
            "/api/files/upload",
            files={"file": ("id.txt", b"certified copy", "text/plain")},
            data={"userId": "uid-1", "fileType": "id-document"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["fileName"] == "id.txt"
        assert data["fileType"] == "id-document"
        assert data["fileUrl"].startswith("/files/files/uid-1/")
        assert data["id"]
        assert data["uploadDate"]


class TestUserFiles:
    """Tests for listing and deleting uploads"""

    def _upload(self, client, user_id, name="cv.pdf"):
        return client.post(
            "/api/files/upload-cv",
            files={"file": (name, PDF_BYTES, "application/pdf")},
            data={"userId": user_id},
        )

    def test_list_user_files(self, client):
        self._upload(client, "uid-1", "first.pdf")
        self._upload(client, "uid-1", "second.pdf")
        self._upload(client, "uid-2")

        response = client.get("/api/files/user/uid-1")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert {f["fileName"] for f in body["data"]} == {"first.pdf", "second.pdf"}
        assert all(f["fileType"] == "cv" for f in body["data"])

    def test_delete_file(self, client, local_storage):
        self._upload(client, "uid-1")
        stored = client.get("/api/files/user/uid-1").json()["data"][0]

        response = client.delete(f"/api/files/{stored['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"deleted": True}}
        assert client.get("/api/files/user/uid-1").json()["data"] == []
        assert not local_storage.file_exists(stored["fileUrl"][len("/files/"):])

    def test_delete_unknown_file(self, client, db_session):
        response = client.delete("/api/files/999")

        assert response.status_code == 404
