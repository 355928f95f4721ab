"""
Claude-powered helpers for the profile editor: scan an uploaded CV into
profile sections and apply free-text corrections to the scanned data.

Errors follow the CV builder routes (see `cv.py`); invalid uploads use the
upload service body `{"detail": {"message", "code"}}`.
"""

import logging
from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from workwise.api.endpoints.cv import require_api_key, run_generation
from workwise.core.config import settings
from workwise.schemas.cv import AIPromptRequest, AIPromptResponse, CVScanResponse
from workwise.services import claude_cv_writer
from workwise.services.upload_service import FileUploadError, UploadRule, validate_file

router = APIRouter(tags=["Profile AI"])
logger = logging.getLogger(__name__)

CV_SCAN_RULE = UploadRule(
    max_size=settings.CV_MAX_SIZE,
    allowed_types=(
        "application/pdf",
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/webp",
        "image/gif",
        "text/plain",
    ),
)


@router.post("/scan-cv", response_model=CVScanResponse, response_model_exclude_none=True)
async def scan_cv(
    file: UploadFile = File(...),
    enhanced_scan: bool = Form(True, alias="enhancedScan"),
):
    """Extract profile data from a CV with warnings and per-section confidence."""
    require_api_key(settings.ANTHROPIC_API_KEY, "Anthropic")

    content = await file.read()
    try:
        validate_file(content, file.content_type, CV_SCAN_RULE)
    except FileUploadError as e:
        logger.warning(f"Rejected CV scan of {file.filename}: {e.code} {e.message}")
        raise HTTPException(status_code=e.status_code, detail={"message": e.message, "code": e.code})

    data = await run_generation(
        claude_cv_writer.scan_cv(content, file.content_type, enhanced=enhanced_scan),
        "scan CV",
    )
    return CVScanResponse(data=data)


@router.post("/process-ai-prompt", response_model=AIPromptResponse, response_model_exclude_none=True)
async def process_ai_prompt(request: AIPromptRequest):
    require_api_key(settings.ANTHROPIC_API_KEY, "Anthropic")
    if not request.prompt or not request.prompt.strip():
        raise HTTPException(status_code=400, detail="Missing prompt")

    changes = await run_generation(
        claude_cv_writer.apply_profile_prompt(request.prompt, request.cv_data, request.warnings),
        "process AI prompt",
    )
    return AIPromptResponse(data=changes)
