"""Enums for model fields."""

from enum import StrEnum


class Language(StrEnum):
    """Languages a post can be written in."""

    EN = "en"
    AR = "ar"
