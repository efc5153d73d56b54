"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field

MIN_PASSWORD_LENGTH = 6


class UserRegister(BaseModel):
    """User registration request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    name: str | None = Field(None, max_length=255)


class UserLogin(BaseModel):
    """Credentials sign-in request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class Identity(BaseModel):
    """Public attributes of an authenticated user. Never includes secrets."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None
    image: str | None


class SessionResponse(BaseModel):
    """Session token response with the signed-in identity."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: Identity


class MessageResponse(BaseModel):
    message: str
