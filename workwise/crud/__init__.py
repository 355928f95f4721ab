"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer keeps SQLAlchemy queries out of the API routes and Celery tasks,
following the Repository pattern.
"""

from workwise.crud import category, company, job, user, profile, user_file, security

__all__ = ["category", "company", "job", "user", "profile", "user_file", "security"]
