"""
AI helpers for the CV builder.

OpenAI-backed routes live at /cv/..., Claude-backed ones at /cv/claude/...
Both share request validation and error shapes:

- missing inputs: 400 {"detail": "<what is missing>"}
- provider key unset: 500 {"detail": "<provider> API key is not configured"}
- unsupported image or document type: 400 {"detail": "<reason>"}
- generation failure: 500 {"detail": {"message": "Failed to ...", "error": "..."}}
"""

import logging
from typing import Any, Awaitable, Optional
from fastapi import APIRouter, HTTPException

from workwise.core.config import settings
from workwise.schemas.cv import (
    AnalyzeImageRequest,
    AnalyzeImageResponse,
    JobDescriptionRequest,
    JobDescriptionResponse,
    SummaryRequest,
    SummaryResponse,
    TranslateRequest,
    TranslateResponse,
)
from workwise.services import claude_cv_writer, cv_writer

router = APIRouter(prefix="/cv", tags=["CV Builder"])
logger = logging.getLogger(__name__)


def require_api_key(key: Optional[str], provider: str) -> None:
    if not key:
        raise HTTPException(status_code=500, detail=f"{provider} API key is not configured")


def _require_summary_fields(request: SummaryRequest) -> None:
    if not (request.name and request.skills and request.experience and request.education):
        raise HTTPException(
            status_code=400,
            detail="Missing required fields for generating a professional summary"
        )


def _require_job_info(request: JobDescriptionRequest) -> None:
    info = request.job_info
    if not info or not info.job_title or not info.employer:
        raise HTTPException(status_code=400, detail="Missing required job information")


def _require_translation_fields(request: TranslateRequest) -> None:
    if not request.text or not request.target_language:
        raise HTTPException(status_code=400, detail="Missing text or target language")


async def run_generation(call: Awaitable[Any], action: str) -> Any:
    try:
        return await call
    except claude_cv_writer.UnsupportedMediaError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error trying to {action}: {e}")
        raise HTTPException(
            status_code=500,
            detail={"message": f"Failed to {action}", "error": str(e)}
        )


@router.post("/generate-summary", response_model=SummaryResponse)
async def generate_summary(request: SummaryRequest):
    """Professional summary from name, skills, experience and education."""
    require_api_key(settings.OPENAI_API_KEY, "OpenAI")
    _require_summary_fields(request)

    summary = await run_generation(
        cv_writer.generate_professional_summary(request),
        "generate professional summary",
    )
    return SummaryResponse(summary=summary)


@router.post("/generate-job-description", response_model=JobDescriptionResponse)
async def generate_job_description(request: JobDescriptionRequest):
    require_api_key(settings.OPENAI_API_KEY, "OpenAI")
    _require_job_info(request)

    description = await run_generation(
        cv_writer.generate_job_description(request.job_info, request.language),
        "generate job description",
    )
    return JobDescriptionResponse(description=description)


@router.post("/translate", response_model=TranslateResponse)
async def translate(request: TranslateRequest):
    require_api_key(settings.OPENAI_API_KEY, "OpenAI")
    _require_translation_fields(request)

    translated = await run_generation(
        cv_writer.translate_text(request.text, request.target_language),
        "translate text",
    )
    return TranslateResponse(translated_text=translated)


@router.post("/claude/generate-summary", response_model=SummaryResponse)
async def generate_summary_with_claude(request: SummaryRequest):
    require_api_key(settings.ANTHROPIC_API_KEY, "Anthropic")
    _require_summary_fields(request)

    summary = await run_generation(
        claude_cv_writer.generate_professional_summary(request),
        "generate professional summary with Claude",
    )
    return SummaryResponse(summary=summary)


@router.post("/claude/generate-job-description", response_model=JobDescriptionResponse)
async def generate_job_description_with_claude(request: JobDescriptionRequest):
    require_api_key(settings.ANTHROPIC_API_KEY, "Anthropic")
    _require_job_info(request)

    description = await run_generation(
        claude_cv_writer.generate_job_description(request.job_info, request.language),
        "generate job description with Claude",
    )
    return JobDescriptionResponse(description=description)


@router.post("/claude/translate", response_model=TranslateResponse)
async def translate_with_claude(request: TranslateRequest):
    require_api_key(settings.ANTHROPIC_API_KEY, "Anthropic")
    _require_translation_fields(request)

    translated = await run_generation(
        claude_cv_writer.translate_text(request.text, request.target_language),
        "translate text with Claude",
    )
    return TranslateResponse(translated_text=translated)


@router.post("/claude/analyze-image", response_model=AnalyzeImageResponse)
async def analyze_image_with_claude(request: AnalyzeImageRequest):
    """Describe a photographed or scanned CV (base64 or data URL)."""
    require_api_key(settings.ANTHROPIC_API_KEY, "Anthropic")
    if not request.image:
        raise HTTPException(status_code=400, detail="Missing image data")

    analysis = await run_generation(
        claude_cv_writer.analyze_image(request.image),
        "analyze image with Claude",
    )
    return AnalyzeImageResponse(analysis=analysis)
