"""
CRUD operations for Category model.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from workwise.crud.slugs import slugify
from workwise.models.category import Category
from workwise.schemas.catalog import CategoryCreateRequest


def get_all(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name).all()


def get_by_id(db: Session, category_id: int) -> Optional[Category]:
    return db.query(Category).filter(Category.id == category_id).first()


def get_by_slug(db: Session, slug: str) -> Optional[Category]:
    return db.query(Category).filter(Category.slug == slug).first()


def create(db: Session, data: CategoryCreateRequest) -> Category:
    """
    Create a category; the slug is derived from the name.

    Callers check `get_by_slug(slugify(name))` first to report duplicates.
    """
    category = Category(name=data.name, slug=slugify(data.name), icon=data.icon)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def count(db: Session) -> int:
    return db.query(Category).count()
