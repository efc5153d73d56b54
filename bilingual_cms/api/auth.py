"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from bilingual_cms.api.dependencies import get_auth_service, get_current_user
from bilingual_cms.config import get_settings
from bilingual_cms.errors import UnauthorizedError
from bilingual_cms.models.user import User
from bilingual_cms.schemas.auth import (
    Identity,
    MessageResponse,
    SessionResponse,
    UserLogin,
    UserRegister,
)
from bilingual_cms.services.auth import AuthService

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    auth_service.register(user_data.email, user_data.password, user_data.name)
    return MessageResponse(message="User created successfully")


@router.post("/session", response_model=SessionResponse)
def sign_in(
    credentials: UserLogin,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Sign in with email and password."""
    user = auth_service.authorize(credentials.email, credentials.password)

    if not user:
        logger.info("Rejected credentials sign-in")
        raise UnauthorizedError("Invalid credentials")

    access_token = auth_service.issue_session(user)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=access_token,
        max_age=settings.jwt_expiration_minutes * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )

    return SessionResponse(
        access_token=access_token,
        user=Identity.model_validate(user),
    )


@router.delete("/session", response_model=MessageResponse)
def sign_out(response: Response):
    """Sign out (the token itself stays valid until it expires)."""
    response.delete_cookie(key=settings.session_cookie_name)
    return MessageResponse(message="Signed out successfully")


@router.get("/me", response_model=Identity)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
