import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from workwise.core.database import get_db
from workwise.crud import job as job_crud
from workwise.schemas.job import JobWithCompanyResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


def _parse_id(value: str, label: str) -> int:
    """
    Path ids arrive as strings from the client's router, so a bad id is a
    400 with a readable message rather than a 422 validation error.
    """
    try:
        return int(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID")


@router.get("/", response_model=List[JobWithCompanyResponse])
def list_jobs(db: Session = Depends(get_db)):
    """All job listings with their companies, newest first."""
    return job_crud.get_with_companies(db)


@router.get("/featured", response_model=List[JobWithCompanyResponse])
def list_featured_jobs(db: Session = Depends(get_db)):
    return job_crud.get_featured(db)


@router.get("/search", response_model=List[JobWithCompanyResponse])
def search_jobs(q: str = "", db: Session = Depends(get_db)):
    """
    Keyword search across title, description, location, job type and
    company name. Every term must match; an empty query lists all jobs.
    """
    jobs = job_crud.search(db, q)
    logger.info(f"Job search {q!r} returned {len(jobs)} results")
    return jobs


@router.get("/company/{company_id}", response_model=List[JobWithCompanyResponse])
def list_jobs_by_company(company_id: str, db: Session = Depends(get_db)):
    return job_crud.get_by_company(db, _parse_id(company_id, "company"))


@router.get("/category/{category_id}", response_model=List[JobWithCompanyResponse])
def list_jobs_by_category(category_id: str, db: Session = Depends(get_db)):
    return job_crud.get_by_category(db, _parse_id(category_id, "category"))


@router.get("/{job_id}", response_model=JobWithCompanyResponse)
def get_job(job_id: str, db: Session = Depends(get_db)):
    """Retrieve a job listing with its company."""
    job = job_crud.get_by_id(db, _parse_id(job_id, "job"))

    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    if not job.company:
        raise HTTPException(status_code=404, detail="Company not found")

    return job
