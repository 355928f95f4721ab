"""
Request/response schemas for the AI CV builder helpers.

Required inputs are validated in the endpoints (400 with a message) rather
than by pydantic, matching what the CV builder client expects.
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import ConfigDict, Field

from workwise.schemas.base import CamelModel
from workwise.schemas.profile import EducationSection, ExperienceSection, PersonalSection, SkillsSection


class SummaryRequest(CamelModel):
    name: Optional[str] = None
    skills: Optional[Union[List[str], str]] = None
    experience: Optional[Union[str, List[Any], Dict[str, Any]]] = None
    education: Optional[Union[str, List[Any], Dict[str, Any]]] = None
    language: str = "English"


class JobInfo(CamelModel):
    model_config = ConfigDict(extra="allow")

    job_title: Optional[str] = None
    employer: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    responsibilities: Optional[Union[str, List[str]]] = None


class JobDescriptionRequest(CamelModel):
    job_info: Optional[JobInfo] = None
    language: str = "English"


class TranslateRequest(CamelModel):
    text: Optional[str] = None
    target_language: Optional[str] = None


class AnalyzeImageRequest(CamelModel):
    image: Optional[str] = None


class SummaryResponse(CamelModel):
    summary: str


class JobDescriptionResponse(CamelModel):
    description: str


class TranslateResponse(CamelModel):
    translated_text: str


class AnalyzeImageResponse(CamelModel):
    analysis: str


class ScanWarning(CamelModel):
    type: str  # handwritten, scratched, missing or unclear
    section: str
    message: str
    suggested_fix: Optional[str] = None


class SectionConfidence(CamelModel):
    section: str
    confidence: float
    notes: Optional[str] = None


class ExtractedProfile(CamelModel):
    """Profile sections read from a CV or proposed by the assistant; all partial."""
    personal: Optional[PersonalSection] = None
    education: Optional[EducationSection] = None
    experience: Optional[ExperienceSection] = None
    skills: Optional[SkillsSection] = None


class CVScanData(CamelModel):
    extracted_data: ExtractedProfile = Field(default_factory=ExtractedProfile)
    warnings: List[ScanWarning] = []
    confidence: List[SectionConfidence] = []


class CVScanResponse(CamelModel):
    success: bool = True
    data: CVScanData


class AIPromptRequest(CamelModel):
    prompt: Optional[str] = None
    cv_data: Dict[str, Any] = {}
    warnings: List[ScanWarning] = []


class AIPromptResponse(CamelModel):
    success: bool = True
    data: ExtractedProfile
