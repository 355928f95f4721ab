"""
Profile completion scoring.

The score drives the level badge and progress bar on the profile page.
Points (max 100):

    personal     fullName 10, phoneNumber 5, location 5, bio 10
    education    highestEducation 10, schoolName 10
    experience   hasExperience 10, then jobTitle 10, employer 10
    skills       any skills 10, any languages 10
"""

from typing import Any, Dict, List, Optional, Tuple

from workwise.models.profile import Profile
from workwise.schemas.profile import ProfileLevel, ProfileResponse

MAX_SCORE = 100

# (minimum percentage, level, title), highest first
LEVELS: List[Tuple[int, int, str]] = [
    (90, 5, "Expert"),
    (75, 4, "Advanced"),
    (50, 3, "Intermediate"),
    (25, 2, "Beginner"),
    (0, 1, "Novice"),
]


def _score(profile: Dict[str, Dict[str, Any]]) -> int:
    personal = profile.get("personal") or {}
    education = profile.get("education") or {}
    experience = profile.get("experience") or {}
    skills = profile.get("skills") or {}

    score = 0
    if personal.get("fullName"):
        score += 10
    if personal.get("phoneNumber"):
        score += 5
    if personal.get("location"):
        score += 5
    if personal.get("bio"):
        score += 10

    if education.get("highestEducation"):
        score += 10
    if education.get("schoolName"):
        score += 10

    # Job title and employer only count for people who report experience
    if experience.get("hasExperience"):
        score += 10
        if experience.get("jobTitle"):
            score += 10
        if experience.get("employer"):
            score += 10

    if skills.get("skills"):
        score += 10
    if skills.get("languages"):
        score += 10

    return score


def calculate_profile_level(profile: Optional[Dict[str, Dict[str, Any]]]) -> ProfileLevel:
    """
    Compute the completion percentage and level for a profile.

    Args:
        profile: Section dict as stored ({"personal": {...}, ...}) or None

    Returns:
        ProfileLevel(level, title, percentage)
    """
    if not profile:
        return ProfileLevel(level=1, title="Novice", percentage=0)

    percentage = min(_score(profile), MAX_SCORE)
    for threshold, level, title in LEVELS:
        if percentage >= threshold:
            return ProfileLevel(level=level, title=title, percentage=percentage)

    return ProfileLevel(level=1, title="Novice", percentage=percentage)


def build_profile_response(profile: Profile) -> ProfileResponse:
    sections = profile.to_dict()
    return ProfileResponse(
        user_id=profile.user_id,
        completion=calculate_profile_level(sections),
        **sections,
    )
