"""
AI helpers for the CV builder (OpenAI).

Generates a professional summary, polishes a job description and
translates CV text. Prompt builders are shared with the Claude-backed
variants in `claude_cv_writer`.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, List, Optional, Union

from openai import AsyncOpenAI

from workwise.core.config import settings
from workwise.schemas.cv import JobInfo, SummaryRequest

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an experienced South African career coach who writes CVs
for entry-level and blue-collar job seekers. Write in plain, confident language,
avoid jargon and never invent qualifications or employers that were not given."""


class CVGenerationError(Exception):
    """Raised when the AI provider fails to produce usable text"""
    pass


def _as_text(value: Optional[Union[str, List[Any], dict]]) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return ", ".join(value)
    return json.dumps(value, ensure_ascii=False)


def build_summary_prompt(data: SummaryRequest) -> str:
    return f"""Write a professional summary of 3-4 sentences for the top of a CV.

Name: {data.name}
Skills: {_as_text(data.skills)}
Experience: {_as_text(data.experience)}
Education: {_as_text(data.education)}

Write the summary in {data.language}. Return only the summary text."""


def build_job_description_prompt(job_info: JobInfo, language: str) -> str:
    extra = {
        k: v for k, v in job_info.model_dump(by_alias=True, exclude_none=True).items()
        if k not in ("jobTitle", "employer")
    }
    details = "\n".join(f"{k}: {_as_text(v)}" for k, v in extra.items())
    return f"""Write a CV entry describing this job in 3-5 short bullet points that start
with action verbs.

Job title: {job_info.job_title}
Employer: {job_info.employer}
{details}

Write it in {language}. Return only the bullet points."""


def build_translation_prompt(text: str, target_language: str) -> str:
    return f"""Translate the following CV text into {target_language}. Keep names,
dates and formatting unchanged. Return only the translation.

{text}"""


async def with_retries(
    call: Callable[[], Awaitable[str]],
    label: str,
    max_retries: int = 3,
) -> str:
    """
    Run an AI call with exponential backoff (1s, 2s, 4s ...).

    Raises:
        CVGenerationError: If every attempt fails or returns empty text
    """
    for attempt in range(max_retries):
        try:
            text = await call()
            if not text or not text.strip():
                raise CVGenerationError("Empty response from AI provider")

            logger.info(f"Generated {label}")
            return text.strip()

        except Exception as e:
            logger.warning(f"Attempt {attempt + 1}/{max_retries}: {label} failed: {e}")
            if attempt == max_retries - 1:
                raise CVGenerationError(f"Failed after {max_retries} attempts: {e}")

        wait_time = 2 ** attempt
        logger.info(f"Retrying in {wait_time} seconds...")
        await asyncio.sleep(wait_time)

    raise CVGenerationError(f"Failed to generate {label} after {max_retries} attempts")


async def _complete(user_prompt: str) -> str:
    client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
    response = await client.chat.completions.create(
        model=settings.OPENAI_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt},
        ],
        temperature=settings.OPENAI_TEMPERATURE,
    )
    return response.choices[0].message.content or ""


async def generate_professional_summary(data: SummaryRequest) -> str:
    prompt = build_summary_prompt(data)
    return await with_retries(lambda: _complete(prompt), "professional summary")


async def generate_job_description(job_info: JobInfo, language: str = "English") -> str:
    prompt = build_job_description_prompt(job_info, language)
    return await with_retries(lambda: _complete(prompt), "job description")


async def translate_text(text: str, target_language: str) -> str:
    prompt = build_translation_prompt(text, target_language)
    return await with_retries(lambda: _complete(prompt), f"translation to {target_language}")
