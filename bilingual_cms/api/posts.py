"""Post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from bilingual_cms.api.dependencies import get_current_user, get_post_service
from bilingual_cms.models.user import User
from bilingual_cms.schemas.auth import MessageResponse
from bilingual_cms.schemas.post import PostCreate, PostResponse, PostUpdate
from bilingual_cms.services.post_service import PostService, parse_post_id

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("", response_model=list[PostResponse])
def list_posts(
    post_service: Annotated[PostService, Depends(get_post_service)],
    lang: Annotated[str | None, Query()] = None,
):
    """Get all posts, newest first, optionally filtered by language."""
    return post_service.list(lang)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    post_service: Annotated[PostService, Depends(get_post_service)],
):
    """Create a new post."""
    return post_service.create(post_data, current_user)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: str,
    post_service: Annotated[PostService, Depends(get_post_service)],
):
    """Get a post by id."""
    return post_service.get(parse_post_id(post_id))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    post_data: PostUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    post_service: Annotated[PostService, Depends(get_post_service)],
):
    """Update a post. Language and author cannot be changed."""
    return post_service.update(parse_post_id(post_id), post_data)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    post_service: Annotated[PostService, Depends(get_post_service)],
):
    """Delete a post."""
    post_service.delete(parse_post_id(post_id))
    return MessageResponse(message="Post deleted successfully")
