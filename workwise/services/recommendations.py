"""
Job recommendations from a job seeker's profile.

Scoring per job:
    +3 for each profile skill found in the job title or description
    +2 when the job location matches a preferred location or the
       profile's own location
    +1 when the job type is one of the preferred job types
    +1 when the job's category appears in the last job title

Jobs that score zero are left out. Ties go to featured jobs, then newer ones.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from workwise.models.job import Job
from workwise.schemas.job import JobWithCompanyResponse
from workwise.schemas.recommendation import JobRecommendation

SKILL_POINTS = 3
LOCATION_POINTS = 2
JOB_TYPE_POINTS = 1
CATEGORY_POINTS = 1


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _place_names(values: Iterable[str]) -> List[str]:
    # "Johannesburg, Gauteng" matches on "johannesburg" and "gauteng"
    names = []
    for value in values:
        names.extend(part for part in (_norm(p) for p in value.split(",")) if part)
    return names


def _created_ts(job: Job) -> float:
    return job.created_at.timestamp() if job.created_at else 0.0


def score_job(job: Job, profile: Dict[str, dict]) -> Tuple[float, List[str]]:
    """
    Score one job against a profile.

    Returns:
        (score, human-readable reasons)
    """
    skills_section = profile.get("skills") or {}
    preferences = profile.get("preferences") or {}
    personal = profile.get("personal") or {}
    experience = profile.get("experience") or {}

    text = f"{_norm(job.title)} {_norm(job.description)}"
    score = 0.0
    reasons: List[str] = []

    for skill in skills_section.get("skills") or []:
        if _norm(skill) and _norm(skill) in text:
            score += SKILL_POINTS
            reasons.append(f"Matches your skill: {skill}")

    places = _place_names(list(preferences.get("locations") or []) + [personal.get("location") or ""])
    job_location = _norm(job.location)
    if job_location and any(place in job_location for place in places):
        score += LOCATION_POINTS
        reasons.append(f"Located in {job.location}")

    job_types = {_norm(t) for t in preferences.get("jobTypes") or []}
    if job.job_type and _norm(job.job_type) in job_types:
        score += JOB_TYPE_POINTS
        reasons.append(f"{job.job_type} position")

    last_title = _norm(experience.get("jobTitle"))
    if job.category is not None and last_title and _norm(job.category.name) in last_title:
        score += CATEGORY_POINTS
        reasons.append(f"Related to your experience in {job.category.name}")

    return score, reasons


def recommend_jobs(jobs: Iterable[Job], profile: Dict[str, dict], limit: int = 10) -> List[JobRecommendation]:
    """
    Rank jobs for a profile.

    Args:
        jobs: Candidate jobs (companies loaded)
        profile: Stored profile sections
        limit: Maximum number of recommendations

    Returns:
        Recommendations ordered by score, then featured, then newest
    """
    scored = []
    for job in jobs:
        score, reasons = score_job(job, profile)
        if score > 0:
            scored.append((score, job, reasons))

    scored.sort(
        key=lambda item: (item[0], item[1].is_featured, _created_ts(item[1]), item[1].id),
        reverse=True,
    )

    return [
        JobRecommendation(
            job=JobWithCompanyResponse.model_validate(job),
            score=score,
            reasons=reasons,
        )
        for score, job, reasons in scored[:limit]
    ]
