"""
Pydantic schemas for the profile editor.

Sections are stored exactly as the client sends them (camelCase keys), so
updates are dumped with `by_alias=True, exclude_unset=True` and merged into
the stored section.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from workwise.schemas.base import CamelModel


class PersonalSection(CamelModel):
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    location: Optional[str] = None
    id_number: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None


class EducationSection(CamelModel):
    highest_education: Optional[str] = None
    school_name: Optional[str] = None
    year_completed: Optional[str] = None
    achievements: Optional[str] = None
    additional_courses: Optional[str] = None


class ExperienceSection(CamelModel):
    has_experience: Optional[bool] = None
    currently_employed: Optional[bool] = None
    job_title: Optional[str] = None
    employer: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    job_description: Optional[str] = None
    previous_experience: Optional[str] = None
    volunteer_work: Optional[str] = None
    references: Optional[str] = None


class SkillsSection(CamelModel):
    skills: Optional[List[str]] = None
    custom_skills: Optional[str] = None
    languages: Optional[List[str]] = None
    has_drivers_license: Optional[bool] = None
    has_transport: Optional[bool] = None
    cv_upload: Optional[str] = None
    create_cv: Optional[bool] = None


class PreferencesSection(CamelModel):
    locations: Optional[List[str]] = None
    job_types: Optional[List[str]] = None
    min_salary: Optional[int] = Field(None, ge=0)
    willing_to_relocate: Optional[bool] = None


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted sections are left untouched."""
    personal: Optional[PersonalSection] = None
    education: Optional[EducationSection] = None
    experience: Optional[ExperienceSection] = None
    skills: Optional[SkillsSection] = None
    preferences: Optional[PreferencesSection] = None


class ProfileLevel(BaseModel):
    level: int
    title: str
    percentage: int


class ProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    personal: dict
    education: dict
    experience: dict
    skills: dict
    preferences: dict
    completion: ProfileLevel


class ProfileUpdateResponse(BaseModel):
    success: bool = True
    message: str = "Profile updated successfully"
    data: ProfileResponse
