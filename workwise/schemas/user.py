"""
Pydantic schemas for user registration and authentication.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.\-]+$")
    password: str = Field(..., min_length=6, max_length=72)  # bcrypt limit
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, max_length=100)


class UserResponse(BaseModel):
    """User response (never includes the password hash)."""
    id: int
    username: str
    email: Optional[str] = None
    name: Optional[str] = None
    is_active: bool
    is_admin: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """JWT token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
