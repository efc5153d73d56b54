"""Authentication service for JWT and password handling."""

import logging
import re
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bilingual_cms.config import Settings, get_settings
from bilingual_cms.errors import ConflictError, InternalError, ValidationError, is_unique_violation
from bilingual_cms.models.user import User
from bilingual_cms.schemas.auth import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str, settings: Settings | None = None) -> str:
    """Create a JWT access token."""
    settings = settings or get_settings()
    now = datetime.now(UTC)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expiration_minutes),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> dict | None:
    """Decode and validate a JWT token."""
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


class AuthService:
    """Credential checks, registration and stateless sessions."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def authorize(self, email: str, password: str) -> User | None:
        """Return the user for a valid email/password pair, otherwise None.

        A missing user and a wrong password are reported the same way.
        """
        user = get_user_by_email(self.db, email)
        if not user or not user.password_hash:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def issue_session(self, user: User) -> str:
        """Mint a signed session token for the user."""
        return create_access_token(user.id, user.email, self.settings)

    def resolve_session(self, token: str | None) -> User | None:
        """Return the user a session token belongs to, or None if it is not valid."""
        if not token:
            return None

        payload = decode_access_token(token, self.settings)
        if payload is None:
            return None

        subject = payload.get("sub")
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            return None

        try:
            return self.db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load session user {user_id}: {e}")
            return None

    def register(self, email: str, password: str, name: str | None = None) -> User:
        """Create a user with a hashed password.

        Raises:
            ValidationError: email is malformed or the password is too short.
            ConflictError: a user with this email already exists.
        """
        errors: dict[str, list[str]] = {}
        if not email or not EMAIL_PATTERN.fullmatch(email):
            errors["email"] = ["Invalid email format"]
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            errors["password"] = [
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            ]
        if errors:
            raise ValidationError(errors=errors)

        if get_user_by_email(self.db, email):
            raise ConflictError("User already exists")

        user = User(email=email, password_hash=get_password_hash(password), name=name or None)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                raise ConflictError("User already exists") from None
            logger.exception("Failed to create user")
            raise InternalError("Error creating user") from None
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to create user")
            raise InternalError("Error creating user") from None

        self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user
