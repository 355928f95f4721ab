from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from workwise.schemas.catalog import CompanyResponse


class JobCreateRequest(BaseModel):
    """Schema for posting a new job (admin dashboard)"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=10)
    company_id: int
    category_id: Optional[int] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    job_type: Optional[str] = None
    work_mode: Optional[str] = None
    is_featured: bool = False


class JobFeatureRequest(BaseModel):
    is_featured: bool


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    description: str
    location: Optional[str] = None
    salary: Optional[str] = None
    job_type: Optional[str] = None
    work_mode: Optional[str] = None
    company_id: int
    category_id: Optional[int] = None
    is_featured: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models


class JobWithCompanyResponse(JobResponse):
    """Job listing with its employer embedded, as rendered on job cards"""
    company: CompanyResponse
