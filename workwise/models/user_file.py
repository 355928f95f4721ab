import enum
from sqlalchemy import Column, Integer, String, DateTime, func
from workwise.core.database import Base


class FileType(str, enum.Enum):
    """Kinds of user uploads tracked by the file service."""
    PROFILE_IMAGE = "profile-image"
    CV = "cv"


class UserFile(Base):
    """
    Metadata for a file a user uploaded.

    `storage_path` is the backend key (local path or s3:// URI);
    `file_url` is what clients download from.
    """
    __tablename__ = "user_files"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)

    file_name = Column(String, nullable=False)
    file_type = Column(String, nullable=False, default="unknown")
    content_type = Column(String, nullable=True)
    size_bytes = Column(Integer, nullable=False, default=0)

    storage_path = Column(String, nullable=False)
    file_url = Column(String, nullable=False)

    upload_date = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<UserFile(id={self.id}, user_id='{self.user_id}', file_type='{self.file_type}')>"
