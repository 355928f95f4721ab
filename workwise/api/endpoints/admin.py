"""
Admin dashboard API.

All routes require a Bearer token for a user with `is_admin`.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from workwise.core.database import get_db
from workwise.core.deps import get_admin_user
from workwise.crud import category as category_crud
from workwise.crud import company as company_crud
from workwise.crud import job as job_crud
from workwise.crud import profile as profile_crud
from workwise.crud import security as security_crud
from workwise.crud import user as user_crud
from workwise.crud import user_file as user_file_crud
from workwise.crud.slugs import slugify
from workwise.models.user import User
from workwise.schemas.catalog import (
    CategoryCreateRequest,
    CategoryResponse,
    CompanyCreateRequest,
    CompanyResponse,
)
from workwise.schemas.job import JobCreateRequest, JobFeatureRequest, JobResponse
from workwise.schemas.security import DenialResponse, SuspiciousIPResponse
from workwise.schemas.user import UserResponse

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)


@router.get("/stats")
def get_stats(
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """Dashboard counters, including security activity for the last 24 hours."""
    since = datetime.now(timezone.utc) - timedelta(hours=24)
    return {
        "users": user_crud.count(db),
        "categories": category_crud.count(db),
        "companies": company_crud.count(db),
        "jobs": job_crud.count(db),
        "featured_jobs": job_crud.count(db, featured_only=True),
        "profiles": profile_crud.count(db),
        "files": user_file_crud.count(db),
        "denials_24h": security_crud.count_denials_since(db, since),
        "critical_denials_24h": security_crud.count_denials_since(db, since, critical_only=True),
        "suspicious_ips": security_crud.count_suspicious_ips(db),
    }


@router.get("/users", response_model=List[UserResponse])
def list_all_users(
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """List all users in the system."""
    return user_crud.get_all(db)


@router.delete("/users/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    if user_id == admin_user.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    if not user_crud.delete(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")

    logger.info(f"Admin {admin_user.username} deleted user {user_id}")
    return {"message": f"User {user_id} deleted successfully"}


@router.post("/categories", status_code=201, response_model=CategoryResponse)
def create_category(
    request: CategoryCreateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    if category_crud.get_by_slug(db, slugify(request.name)):
        raise HTTPException(status_code=409, detail="Category already exists")

    category = category_crud.create(db, request)
    logger.info(f"Admin {admin_user.username} created category {category.slug}")
    return category


@router.post("/companies", status_code=201, response_model=CompanyResponse)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    if company_crud.get_by_slug(db, slugify(request.name)):
        raise HTTPException(status_code=409, detail="Company already exists")

    company = company_crud.create(db, request)
    logger.info(f"Admin {admin_user.username} created company {company.slug}")
    return company


@router.post("/jobs", status_code=201, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """Post a job listing for an existing company (and optional category)."""
    if not company_crud.get_by_id(db, request.company_id):
        raise HTTPException(status_code=404, detail="Company not found")

    if request.category_id is not None and not category_crud.get_by_id(db, request.category_id):
        raise HTTPException(status_code=404, detail="Category not found")

    try:
        job = job_crud.create(db, request)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating job: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create job: {str(e)}")

    logger.info(f"Admin {admin_user.username} created job {job.id}: {job.title}")
    return job


@router.patch("/jobs/{job_id}/feature", response_model=JobResponse)
def feature_job(
    job_id: int,
    request: JobFeatureRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    job = job_crud.set_featured(db, job_id, request.is_featured)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return job


@router.delete("/jobs/{job_id}")
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    if not job_crud.delete(db, job_id):
        raise HTTPException(status_code=404, detail="Job not found")

    logger.info(f"Admin {admin_user.username} deleted job {job_id}")
    return {"message": f"Job {job_id} deleted successfully"}


@router.get("/security/denials", response_model=List[DenialResponse])
def list_denials(
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """Most recent Firestore permission denials."""
    return security_crud.get_recent_denials(db, limit=limit)


@router.get("/security/suspicious-ips", response_model=List[SuspiciousIPResponse])
def list_suspicious_ips(
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    return security_crud.get_suspicious_ips(db, limit=limit)
