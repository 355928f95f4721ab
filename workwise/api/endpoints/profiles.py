import logging
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from workwise.core.database import get_db
from workwise.crud import profile as profile_crud
from workwise.schemas.profile import ProfileResponse, ProfileUpdateRequest, ProfileUpdateResponse
from workwise.services.profile_service import build_profile_response

router = APIRouter(prefix="/profile", tags=["Profiles"])
logger = logging.getLogger(__name__)


@router.get("/{user_id}", response_model=ProfileResponse, response_model_by_alias=True)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    """
    Job seeker profile with its computed completion level.
    """
    profile = profile_crud.get_by_user_id(db, user_id)

    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    return build_profile_response(profile)


@router.put("/{user_id}", response_model=ProfileUpdateResponse, response_model_by_alias=True)
def update_profile(
    user_id: str,
    request: ProfileUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Save one or more profile sections.

    Only the fields sent are changed; the profile is created on first save.
    """
    sections = {
        name: section.model_dump(by_alias=True, exclude_unset=True)
        for name, section in request
        if section is not None
    }

    try:
        profile = profile_crud.upsert(db, user_id, sections)
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating profile for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update profile: {str(e)}")

    logger.info(f"Updated profile {user_id}: {', '.join(sections) or 'no sections'}")
    return ProfileUpdateResponse(data=build_profile_response(profile))
