"""Post model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from bilingual_cms.database import Base
from bilingual_cms.models.mixins import TimestampMixin


class Post(Base, TimestampMixin):
    """A localized post. Slugs are unique per language."""

    __tablename__ = "posts"
    __table_args__ = (UniqueConstraint("language", "slug", name="uq_posts_language_slug"),)

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    language = Column(String(2), nullable=False, index=True)  # 'en', 'ar'
    slug = Column(String(255), nullable=False)
    published = Column(Boolean, nullable=False, default=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    author = relationship("User", backref="posts")
