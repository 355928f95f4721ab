"""
CRUD operations for Company model.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from workwise.crud.slugs import slugify
from workwise.models.company import Company
from workwise.schemas.catalog import CompanyCreateRequest


def get_all(db: Session) -> List[Company]:
    return db.query(Company).order_by(Company.name).all()


def get_by_id(db: Session, company_id: int) -> Optional[Company]:
    return db.query(Company).filter(Company.id == company_id).first()


def get_by_slug(db: Session, slug: str) -> Optional[Company]:
    return db.query(Company).filter(Company.slug == slug).first()


def create(db: Session, data: CompanyCreateRequest) -> Company:
    company = Company(
        name=data.name,
        slug=slugify(data.name),
        logo=data.logo,
        location=data.location,
        description=data.description,
        website=data.website,
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def count(db: Session) -> int:
    return db.query(Company).count()
