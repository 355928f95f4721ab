"""
CRUD operations for Profile model.
"""

from typing import Dict, Optional
from sqlalchemy.orm import Session
from workwise.models.profile import Profile


def get_by_user_id(db: Session, user_id: str) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.user_id == user_id).first()


def upsert(db: Session, user_id: str, sections: Dict[str, dict]) -> Profile:
    """
    Merge section updates into a user's profile, creating it if needed.

    Each provided section is shallow-merged into the stored one, so the
    profile editor can save one tab at a time.

    Args:
        db: Database session
        user_id: Owner id from the client's auth provider
        sections: {section_name: {camelCaseField: value}}

    Returns:
        The updated Profile
    """
    profile = get_by_user_id(db, user_id)
    if profile is None:
        profile = Profile(user_id=user_id, **{name: {} for name in Profile.SECTIONS})
        db.add(profile)

    for name, values in sections.items():
        if name not in Profile.SECTIONS:
            continue
        merged = dict(getattr(profile, name) or {})
        merged.update(values)
        # Assign a new dict so SQLAlchemy detects the JSON change
        setattr(profile, name, merged)

    db.commit()
    db.refresh(profile)

    return profile


def count(db: Session) -> int:
    return db.query(Profile).count()
