"""
CRUD operations for User model.
"""

from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from workwise.core.security import get_password_hash, verify_password
from workwise.models.user import User
from workwise.schemas.user import UserRegisterRequest


def get_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_all(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def create(db: Session, data: UserRegisterRequest, is_admin: bool = False) -> User:
    """Create a user, hashing the password."""
    user = User(
        username=data.username,
        hashed_password=get_password_hash(data.password),
        email=data.email,
        name=data.name,
        is_active=True,
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    """
    Return the user when the credentials match, recording the login time.
    """
    user = get_by_username(db, username)
    if not user or not verify_password(password, user.hashed_password):
        return None

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    return user


def delete(db: Session, user_id: int) -> bool:
    user = get_by_id(db, user_id)
    if not user:
        return False

    db.delete(user)
    db.commit()
    return True


def count(db: Session) -> int:
    return db.query(User).count()
