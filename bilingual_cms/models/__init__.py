"""SQLAlchemy models."""

from bilingual_cms.models.post import Post
from bilingual_cms.models.user import User

__all__ = [
    "User",
    "Post",
]
