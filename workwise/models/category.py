from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from workwise.core.database import Base


class Category(Base):
    """Job category shown on the home page and category listings."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    icon = Column(String, nullable=True)

    jobs = relationship("Job", back_populates="category")

    @property
    def job_count(self) -> int:
        return len(self.jobs)

    def __repr__(self):
        return f"<Category(id={self.id}, slug='{self.slug}')>"
