"""User model."""

from sqlalchemy import Column, Integer, String

from bilingual_cms.database import Base
from bilingual_cms.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and post authorship."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    image = Column(String(2048), nullable=True)  # avatar URL
