import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from workwise.core.database import get_db
from workwise.crud import company as company_crud
from workwise.schemas.catalog import CompanyResponse

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[CompanyResponse])
def list_companies(db: Session = Depends(get_db)):
    """List employers with their open position counts."""
    return company_crud.get_all(db)


@router.get("/{slug}", response_model=CompanyResponse)
def get_company(slug: str, db: Session = Depends(get_db)):
    company = company_crud.get_by_slug(db, slug)

    if not company:
        raise HTTPException(status_code=404, detail="Company not found")

    return company
