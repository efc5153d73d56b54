"""Post schemas.

Posts are exchanged as camelCase JSON (``authorId``, ``createdAt``); request
bodies also accept the snake_case field names.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bilingual_cms.models.enums import Language


class PostBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PostCreate(PostBase):
    """Create a new post."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str | None = None
    language: Language
    published: bool = Field(False, strict=True)
    slug: str = Field(..., min_length=1, max_length=255)
    author_id: int = Field(..., gt=0, le=2**31 - 1, strict=True)


class PostUpdate(PostBase):
    """Update a post.

    ``language`` and ``author_id`` are declared only so the service can tell
    that a caller tried to change them; neither is ever applied.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = None
    published: bool | None = Field(None, strict=True)
    slug: str | None = Field(None, min_length=1, max_length=255)
    language: Any = None
    author_id: Any = None


class PostResponse(PostBase):
    """Post response."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    content: str | None
    language: Language
    published: bool
    slug: str
    author_id: int
    created_at: datetime
    updated_at: datetime
