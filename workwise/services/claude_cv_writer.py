"""
Claude-backed CV builder helpers (Anthropic Messages API).

Same prompts as the OpenAI helpers, plus the document features the profile
editor relies on: image analysis for photographed CVs, structured CV
scanning and instruction-driven profile edits. Structured answers are
requested as a single JSON object and validated with the response schemas.
"""

import base64
import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from anthropic import AsyncAnthropic
from pydantic import ValidationError

from workwise.core.config import settings
from workwise.schemas.cv import CVScanData, ExtractedProfile, JobInfo, ScanWarning, SummaryRequest
from workwise.services.cv_writer import (
    SYSTEM_PROMPT,
    CVGenerationError,
    build_job_description_prompt,
    build_summary_prompt,
    build_translation_prompt,
    with_retries,
)

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}

DATA_URL_RE = re.compile(r"^data:(?P<media_type>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)

JSON_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")

IMAGE_PROMPT = """This is a photo or scan of a CV or supporting document. Describe what
information it contains (personal details, education, work experience, skills),
note anything that is handwritten, crossed out or unreadable, and suggest what
the job seeker should fix before sending it to employers."""

PROFILE_SHAPE = """{
  "personal": {"fullName", "phoneNumber", "location", "idNumber", "dateOfBirth", "gender", "bio"},
  "education": {"highestEducation", "schoolName", "yearCompleted", "achievements"},
  "experience": {"jobTitle", "employer", "jobDescription"},
  "skills": {"skills": [..], "languages": [..]}
}"""

SCAN_PROMPT = f"""Read this CV and extract the job seeker's details. Reply with one JSON
object and nothing else:

{{
  "extractedData": {PROFILE_SHAPE},
  "warnings": [{{"type": "handwritten|scratched|missing|unclear", "section": "...",
                 "message": "...", "suggestedFix": "..."}}],
  "confidence": [{{"section": "...", "confidence": 0.0-1.0, "notes": "..."}}]
}}

Leave out fields you cannot find instead of guessing. Every value is a string
except the skills and languages lists."""

ENHANCED_SCAN_NOTE = """
Look closely for handwriting, crossed-out text, smudges and faded print. Add a
warning for each one, and a "missing" warning for any section the CV lacks."""

def build_profile_prompt(prompt: str, cv_data: Dict[str, Any], warnings: List[ScanWarning]) -> str:
    current = json.dumps(cv_data, ensure_ascii=False, indent=2)
    open_warnings = json.dumps([w.model_dump(by_alias=True, exclude_none=True) for w in warnings], indent=2)
    return f"""A job seeker is fixing the profile data scanned from their CV.

Current data:
{current}

Open warnings:
{open_warnings}

Their instruction: {prompt.strip()}

Apply the instruction. Reply with one JSON object containing only the sections
you changed, using this shape, and nothing else:
{PROFILE_SHAPE}"""


class UnsupportedMediaError(CVGenerationError):
    """The image or document type cannot be sent to Claude (a client error)"""
    pass


def _normalize_media_type(media_type: Optional[str]) -> str:
    media_type = (media_type or "").split(";")[0].strip().lower()
    return "image/jpeg" if media_type == "image/jpg" else media_type


def parse_image(image: str) -> Tuple[str, str]:
    """
    Split a data URL into (media_type, base64 data).

    Bare base64 strings are treated as JPEG.

    Raises:
        UnsupportedMediaError: For unsupported image types
    """
    match = DATA_URL_RE.match(image.strip())
    if not match:
        return "image/jpeg", image.strip()

    media_type = _normalize_media_type(match.group("media_type"))
    if media_type not in SUPPORTED_IMAGE_TYPES:
        raise UnsupportedMediaError(f"Unsupported image type: {media_type}")

    return media_type, match.group("data")


def document_block(content: bytes, media_type: Optional[str]) -> Dict[str, Any]:
    """Message content block for an uploaded CV (image, PDF or plain text)."""
    media_type = _normalize_media_type(media_type)

    if media_type in SUPPORTED_IMAGE_TYPES:
        kind = "image"
    elif media_type == "application/pdf":
        kind = "document"
    elif media_type == "text/plain":
        return {"type": "text", "text": content.decode("utf-8", errors="replace")}
    else:
        raise UnsupportedMediaError(f"Unsupported CV file type: {media_type or 'unknown'}")

    data = base64.standard_b64encode(content).decode("ascii")
    return {"type": kind, "source": {"type": "base64", "media_type": media_type, "data": data}}


def parse_json_reply(text: str) -> Dict[str, Any]:
    """
    Pull the JSON object out of a model reply (tolerates code fences and
    stray prose around it).

    Raises:
        CVGenerationError: When no JSON object can be decoded
    """
    cleaned = JSON_FENCE_RE.sub("", text.strip())
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start == -1 or end < start:
        raise CVGenerationError("AI response did not contain a JSON object")

    try:
        parsed = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError as e:
        raise CVGenerationError(f"AI response was not valid JSON: {e}")

    if not isinstance(parsed, dict):
        raise CVGenerationError("AI response was not a JSON object")
    return parsed


async def _complete(content: List[dict], max_tokens: Optional[int] = None) -> str:
    client = AsyncAnthropic(api_key=settings.ANTHROPIC_API_KEY)
    message = await client.messages.create(
        model=settings.ANTHROPIC_MODEL,
        max_tokens=max_tokens or settings.ANTHROPIC_MAX_TOKENS,
        system=SYSTEM_PROMPT,
        messages=[{"role": "user", "content": content}],
    )
    return "".join(block.text for block in message.content if block.type == "text")


def _text(prompt: str) -> List[dict]:
    return [{"type": "text", "text": prompt}]


async def generate_professional_summary(data: SummaryRequest) -> str:
    content = _text(build_summary_prompt(data))
    return await with_retries(lambda: _complete(content), "professional summary (Claude)")


async def generate_job_description(job_info: JobInfo, language: str = "English") -> str:
    content = _text(build_job_description_prompt(job_info, language))
    return await with_retries(lambda: _complete(content), "job description (Claude)")


async def translate_text(text: str, target_language: str) -> str:
    content = _text(build_translation_prompt(text, target_language))
    return await with_retries(lambda: _complete(content), f"translation to {target_language} (Claude)")


async def analyze_image(image: str) -> str:
    media_type, data = parse_image(image)
    content = [
        {"type": "image", "source": {"type": "base64", "media_type": media_type, "data": data}},
        {"type": "text", "text": IMAGE_PROMPT},
    ]
    return await with_retries(lambda: _complete(content), "image analysis (Claude)")


async def scan_cv(content: bytes, media_type: Optional[str], enhanced: bool = True) -> CVScanData:
    """
    Extract profile data, warnings and per-section confidence from a CV.

    Raises:
        UnsupportedMediaError: For file types Claude cannot read
        CVGenerationError: When generation fails or the reply is not usable
    """
    prompt = SCAN_PROMPT + (ENHANCED_SCAN_NOTE if enhanced else "")
    blocks = [document_block(content, media_type), {"type": "text", "text": prompt}]

    reply = await with_retries(
        lambda: _complete(blocks, settings.ANTHROPIC_SCAN_MAX_TOKENS),
        "CV scan (Claude)",
    )
    try:
        result = CVScanData.model_validate(parse_json_reply(reply))
    except ValidationError as e:
        raise CVGenerationError(f"AI response did not match the scan format: {e.error_count()} errors")

    logger.info(f"Scanned CV: {len(result.warnings)} warnings, {len(result.confidence)} sections rated")
    return result


async def apply_profile_prompt(
    prompt: str,
    cv_data: Dict[str, Any],
    warnings: List[ScanWarning],
) -> ExtractedProfile:
    """
    Apply a job seeker's instruction ("my surname is spelt Nkosi") to scanned
    profile data and return only the changed sections.
    """
    content = _text(build_profile_prompt(prompt, cv_data, warnings))

    reply = await with_retries(
        lambda: _complete(content, settings.ANTHROPIC_SCAN_MAX_TOKENS),
        "profile prompt (Claude)",
    )
    try:
        return ExtractedProfile.model_validate(parse_json_reply(reply))
    except ValidationError as e:
        raise CVGenerationError(f"AI response did not match the profile format: {e.error_count()} errors")
