"""Post service: validation and persistence of localized posts."""

import logging
import re

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bilingual_cms.errors import (
    ConflictError,
    InternalError,
    InvalidInputError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
    is_unique_violation,
)
from bilingual_cms.models.post import Post
from bilingual_cms.models.user import User
from bilingual_cms.schemas.post import PostCreate, PostUpdate

logger = logging.getLogger(__name__)

SLUG_CONFLICT_MESSAGE = "A post with this slug already exists in the selected language."

# Fields an update may change, and those it may never touch.
UPDATABLE_FIELDS = ("title", "content", "published", "slug")
IMMUTABLE_FIELDS = {
    "language": "Language cannot be changed.",
    "author_id": "Author ID cannot be changed.",
}

POST_ID_PATTERN = re.compile(r"-?[0-9]+")

# Range of the 32-bit INTEGER id column.
MIN_POST_ID = -(2**31)
MAX_POST_ID = 2**31 - 1


def parse_post_id(raw_id: str | int) -> int:
    """Parse a post id taken from a URL path."""
    if isinstance(raw_id, str):
        if not POST_ID_PATTERN.fullmatch(raw_id.strip()):
            raise InvalidInputError("Invalid post ID")
        raw_id = int(raw_id)
    if not MIN_POST_ID <= raw_id <= MAX_POST_ID:
        raise InvalidInputError("Invalid post ID")
    return raw_id


class PostService:
    """Service for post CRUD operations.

    Every method works against the session it was built with and commits
    its own changes; nothing is cached between calls.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, data: PostCreate, actor: User) -> Post:
        """Create a post.

        Raises:
            ValidationError: the author does not exist.
            ConflictError: a post with the same slug exists in the language.
        """
        author = self.db.query(User).filter(User.id == data.author_id).first()
        if author is None:
            raise ValidationError(errors={"authorId": ["Author does not exist"]})

        post = Post(
            title=data.title,
            content=data.content,
            language=data.language.value,
            published=data.published,
            slug=data.slug,
            author_id=data.author_id,
        )
        self.db.add(post)
        self._commit("creating post")
        self.db.refresh(post)

        logger.info(f"User {actor.id} created post {post.id} ({post.language}/{post.slug})")
        return post

    def get(self, post_id: int) -> Post:
        """Get a post by id."""
        post = self.db.query(Post).filter(Post.id == post_id).first()
        if not post:
            raise NotFoundError("Post not found")
        return post

    def list(self, language: str | None = None) -> list[Post]:
        """List posts, newest first, optionally restricted to one language."""
        query = self.db.query(Post)
        if language:
            query = query.filter(Post.language == language)
        return query.order_by(Post.created_at.desc(), Post.id.desc()).all()

    def update(self, post_id: int, data: PostUpdate) -> Post:
        """Apply the fields present in ``data`` to a post.

        Raises:
            InvalidOperationError: the payload tries to change language or author.
            InvalidInputError: the payload has no updatable fields.
            ValidationError: a present field has an invalid value.
            NotFoundError: the post does not exist.
            ConflictError: the new slug is taken in the post's language.
        """
        present = data.model_fields_set

        for field, message in IMMUTABLE_FIELDS.items():
            if field in present:
                raise InvalidOperationError(message)

        changes = {field: getattr(data, field) for field in UPDATABLE_FIELDS if field in present}
        if not changes:
            raise InvalidInputError("No fields to update")

        errors: dict[str, list[str]] = {}
        if "title" in changes and not changes["title"]:
            errors["title"] = ["Title cannot be empty"]
        if "slug" in changes and not changes["slug"]:
            errors["slug"] = ["Slug cannot be empty"]
        if "published" in changes and changes["published"] is None:
            errors["published"] = ["Published must be true or false"]
        if errors:
            raise ValidationError(errors=errors)

        post = self.get(post_id)
        for field, value in changes.items():
            setattr(post, field, value)

        self._commit(f"updating post {post_id}")
        self.db.refresh(post)

        logger.info(f"Updated post {post_id}: {', '.join(sorted(changes))}")
        return post

    def delete(self, post_id: int) -> None:
        """Delete a post. Deleting a missing post raises NotFoundError."""
        post = self.get(post_id)
        self.db.delete(post)
        self._commit(f"deleting post {post_id}")
        logger.info(f"Deleted post {post_id}")

    def _commit(self, action: str) -> None:
        """Commit the session, mapping store failures onto application errors."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                raise ConflictError(SLUG_CONFLICT_MESSAGE) from None
            logger.exception(f"Integrity error while {action}")
            raise InternalError(f"Error {action}") from None
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Database error while {action}")
            raise InternalError(f"Error {action}") from None
