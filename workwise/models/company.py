from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from workwise.core.database import Base


class Company(Base):
    """Employer with a public company page."""
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    logo = Column(String, nullable=True)
    location = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    website = Column(String, nullable=True)

    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan")

    @property
    def open_positions(self) -> int:
        return len(self.jobs)

    def __repr__(self):
        return f"<Company(id={self.id}, slug='{self.slug}')>"
