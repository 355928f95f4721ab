"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for job listings, providing a clean interface for the API layer.
"""

from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from workwise.models.company import Company
from workwise.models.job import Job
from workwise.schemas.job import JobCreateRequest


def _with_company(db: Session):
    return db.query(Job).options(joinedload(Job.company))


def _newest_first(query):
    return query.order_by(Job.created_at.desc(), Job.id.desc())


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job listing.

    Args:
        db: Database session
        job_data: Validated job creation data (company/category already checked)

    Returns:
        Created Job instance with id
    """
    db_job = Job(**job_data.model_dump())

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: int) -> Optional[Job]:
    """Retrieve a job by its ID."""
    return db.query(Job).filter(Job.id == job_id).first()


def get_with_companies(db: Session) -> List[Job]:
    """All jobs with their companies loaded, newest first."""
    return _newest_first(_with_company(db)).all()


def get_featured(db: Session) -> List[Job]:
    return _newest_first(_with_company(db).filter(Job.is_featured.is_(True))).all()


def get_by_company(db: Session, company_id: int) -> List[Job]:
    return _newest_first(_with_company(db).filter(Job.company_id == company_id)).all()


def get_by_category(db: Session, category_id: int) -> List[Job]:
    return _newest_first(_with_company(db).filter(Job.category_id == category_id)).all()


def search(db: Session, query: str) -> List[Job]:
    """
    Case-insensitive keyword search.

    Every whitespace-separated term must appear in the title, description,
    location, job type or company name. An empty query returns all jobs.

    Args:
        db: Database session
        query: Free-text search string

    Returns:
        Matching jobs with companies, newest first
    """
    terms = query.split()
    q = _with_company(db).join(Job.company)

    for term in terms:
        pattern = f"%{term}%"
        q = q.filter(or_(
            Job.title.ilike(pattern),
            Job.description.ilike(pattern),
            Job.location.ilike(pattern),
            Job.job_type.ilike(pattern),
            Company.name.ilike(pattern),
        ))

    return _newest_first(q).all()


def set_featured(db: Session, job_id: int, is_featured: bool) -> Optional[Job]:
    job = get_by_id(db, job_id)
    if not job:
        return None

    job.is_featured = is_featured
    db.commit()
    db.refresh(job)

    return job


def delete(db: Session, job_id: int) -> bool:
    """
    Delete a job by ID.

    Returns:
        True if deleted, False if not found
    """
    job = get_by_id(db, job_id)
    if not job:
        return False

    db.delete(job)
    db.commit()

    return True


def count(db: Session, featured_only: bool = False) -> int:
    query = db.query(Job)
    if featured_only:
        query = query.filter(Job.is_featured.is_(True))
    return query.count()
