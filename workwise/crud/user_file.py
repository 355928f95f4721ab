"""
CRUD operations for UserFile model.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from workwise.models.user_file import UserFile


def create(
    db: Session,
    user_id: str,
    file_name: str,
    file_type: str,
    content_type: Optional[str],
    size_bytes: int,
    storage_path: str,
    file_url: str,
) -> UserFile:
    user_file = UserFile(
        user_id=user_id,
        file_name=file_name,
        file_type=file_type,
        content_type=content_type,
        size_bytes=size_bytes,
        storage_path=storage_path,
        file_url=file_url,
    )
    db.add(user_file)
    db.commit()
    db.refresh(user_file)
    return user_file


def get_by_id(db: Session, file_id: int) -> Optional[UserFile]:
    return db.query(UserFile).filter(UserFile.id == file_id).first()


def get_by_user(db: Session, user_id: str) -> List[UserFile]:
    return (
        db.query(UserFile)
        .filter(UserFile.user_id == user_id)
        .order_by(UserFile.upload_date.desc(), UserFile.id.desc())
        .all()
    )


def delete(db: Session, user_file: UserFile) -> None:
    db.delete(user_file)
    db.commit()


def count(db: Session) -> int:
    return db.query(UserFile).count()
