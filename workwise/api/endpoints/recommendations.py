import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session

from workwise.core.database import get_db
from workwise.crud import job as job_crud
from workwise.crud import profile as profile_crud
from workwise.schemas.recommendation import JobRecommendation
from workwise.services.recommendations import recommend_jobs

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])
logger = logging.getLogger(__name__)


@router.get("/{user_id}", response_model=List[JobRecommendation])
def get_recommendations(
    user_id: str,
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db)
):
    """
    Jobs ranked by how well they fit the user's profile
    (skills, preferred locations and job types, last job title).
    """
    profile = profile_crud.get_by_user_id(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    recommendations = recommend_jobs(job_crud.get_with_companies(db), profile.to_dict(), limit=limit)
    logger.info(f"Returning {len(recommendations)} recommendations for {user_id}")
    return recommendations
