"""
User registration and authentication endpoints.

Registration validates the body itself so that bad input is a 400 with a
field-by-field error list, which is what the sign-up form renders.
"""

import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from workwise.core.database import get_db
from workwise.core.deps import get_current_user
from workwise.core.security import create_access_token, create_refresh_token
from workwise.crud import user as user_crud
from workwise.models.user import User
from workwise.schemas.user import UserRegisterRequest, UserResponse, TokenResponse

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


def _validation_errors(e: ValidationError) -> list:
    return [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in e.errors()
    ]


@router.post("/register", status_code=201, response_model=UserResponse)
def register(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Returns the created user without its password.
    """
    try:
        request = UserRegisterRequest.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Invalid user data", "errors": _validation_errors(e)},
        )

    if user_crud.get_by_username(db, request.username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists"
        )

    try:
        new_user = user_crud.create(db, request)
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists"
        )

    logger.info(f"New user registered: {new_user.username} (id {new_user.id})")
    return new_user


@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Authenticate with username/password and return JWT tokens.
    """
    user = user_crud.authenticate(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive. Please contact support."
        )

    logger.info(f"User logged in: {user.username}")

    access_token = create_access_token(data={"sub": str(user.id), "is_admin": user.is_admin})
    refresh_token = create_refresh_token(data={"sub": str(user.id)})

    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(current_user: User = Depends(get_current_user)):
    """Current authenticated user (Bearer token required)."""
    return current_user
