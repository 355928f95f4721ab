"""
Database models package.
"""

from workwise.models.user import User
from workwise.models.category import Category
from workwise.models.company import Company
from workwise.models.job import Job
from workwise.models.profile import Profile
from workwise.models.user_file import UserFile, FileType
from workwise.models.security_event import SecurityDenial, SuspiciousIP

__all__ = [
    "User",
    "Category",
    "Company",
    "Job",
    "Profile",
    "UserFile",
    "FileType",
    "SecurityDenial",
    "SuspiciousIP",
]
