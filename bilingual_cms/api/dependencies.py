"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bilingual_cms.config import get_settings
from bilingual_cms.database import get_db
from bilingual_cms.errors import UnauthorizedError
from bilingual_cms.models.user import User
from bilingual_cms.services.auth import AuthService
from bilingual_cms.services.post_service import PostService

security = HTTPBearer(auto_error=False)

settings = get_settings()


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, settings)


def get_post_service(
    db: Annotated[Session, Depends(get_db)],
) -> PostService:
    """Get post service with dependencies."""
    return PostService(db)


def get_session_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    session_cookie: Annotated[str | None, Cookie(alias=settings.session_cookie_name)] = None,
) -> str | None:
    """Read the session token from the Authorization header, falling back to the cookie."""
    if credentials is not None:
        return credentials.credentials
    return session_cookie


def get_current_user(
    token: Annotated[str | None, Depends(get_session_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Get the current authenticated user from the session token."""
    user = auth_service.resolve_session(token)
    if user is None:
        raise UnauthorizedError()
    return user
