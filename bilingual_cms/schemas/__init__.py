"""Pydantic schemas for API requests and responses."""

from bilingual_cms.schemas.auth import (
    Identity,
    MessageResponse,
    SessionResponse,
    UserLogin,
    UserRegister,
)
from bilingual_cms.schemas.post import PostCreate, PostResponse, PostUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "Identity",
    "SessionResponse",
    "MessageResponse",
    "PostCreate",
    "PostUpdate",
    "PostResponse",
]
