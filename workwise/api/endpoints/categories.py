import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from workwise.core.database import get_db
from workwise.crud import category as category_crud
from workwise.schemas.catalog import CategoryResponse

router = APIRouter(prefix="/categories", tags=["Categories"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    """List job categories with their live job counts."""
    return category_crud.get_all(db)


@router.get("/{slug}", response_model=CategoryResponse)
def get_category(slug: str, db: Session = Depends(get_db)):
    category = category_crud.get_by_slug(db, slug)

    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    return category
