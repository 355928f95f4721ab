"""
Job seeker profile model.

Each section of the profile editor (personal, education, experience, skills,
preferences) is stored as a JSON document keyed by the client's camelCase
field names. `user_id` is the opaque id issued by the client's auth provider.
"""

from sqlalchemy import Column, Integer, String, DateTime, func
from workwise.core.database import Base, JSONType


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, unique=True, nullable=False, index=True)

    personal = Column(JSONType, nullable=False, default=dict)
    education = Column(JSONType, nullable=False, default=dict)
    experience = Column(JSONType, nullable=False, default=dict)
    skills = Column(JSONType, nullable=False, default=dict)
    preferences = Column(JSONType, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    SECTIONS = ("personal", "education", "experience", "skills", "preferences")

    def to_dict(self) -> dict:
        return {section: dict(getattr(self, section) or {}) for section in self.SECTIONS}

    def __repr__(self):
        return f"<Profile(id={self.id}, user_id='{self.user_id}')>"
