"""
User model for job seekers, employers and administrators.

Usernames are unique; passwords are stored as bcrypt hashes only.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from workwise.core.database import Base


class User(Base):
    """Registered account. `is_admin` unlocks the admin dashboard."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)

    # Profile basics
    email = Column(String, nullable=True, index=True)
    name = Column(String, nullable=True)

    # Account status
    is_active = Column(Boolean, default=True, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
