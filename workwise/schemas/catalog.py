"""
Pydantic schemas for categories and companies.
"""

from typing import Optional
from pydantic import BaseModel, Field


class CategoryResponse(BaseModel):
    id: int
    name: str
    slug: str
    icon: Optional[str] = None
    job_count: int = 0

    class Config:
        from_attributes = True


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    icon: Optional[str] = None


class CompanyResponse(BaseModel):
    id: int
    name: str
    slug: str
    logo: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    open_positions: int = 0

    class Config:
        from_attributes = True


class CompanyCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    logo: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
