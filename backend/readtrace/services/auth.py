"""Authentication service."""
from datetime import datetime, timedelta
from typing import Optional, List
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from readtrace.config import settings
from readtrace.models.user import User
from readtrace.repositories.profile import ProfileRepository
from readtrace.services.platforms import normalize_preferences
from readtrace.services.validators import validate_email, validate_password, validate_username

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class RegistrationError(Exception):
    """Registration rejected."""
    def __init__(self, errors: List[str], conflict: bool = False):
        self.errors = errors
        self.conflict = conflict
        super().__init__("; ".join(errors))


class AuthService:
    """Authentication and authorization service."""

    def __init__(self, db: Session):
        self.db = db
        self.profiles = ProfileRepository(db)

    def verify_password(self, plain: str, hashed: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain, hashed)

    def hash_password(self, password: str) -> str:
        """Hash a password for storage."""
        return pwd_context.hash(password)

    def create_token(self, user_id: int) -> str:
        """Create a JWT token for a user."""
        expire = datetime.utcnow() + timedelta(hours=settings.jwt_expiry_hours)
        payload = {
            "sub": str(user_id),
            "exp": expire,
            "iat": datetime.utcnow(),
        }
        return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    def decode_token(self, token: str) -> Optional[int]:
        """Decode a JWT token and return user_id, or None if invalid."""
        try:
            payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
            return int(payload.get("sub"))
        except (JWTError, TypeError, ValueError):
            return None

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Authenticate a user by email and password."""
        user = self.profiles.get_by_email((email or "").strip().lower())
        if user and self.verify_password(password, user.password_hash):
            return user
        return None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        return self.profiles.get(user_id)

    def create_user(self, email: str, password: str, username: Optional[str] = None) -> User:
        """Create a user without validation (CLI and fixtures)."""
        return self.profiles.create(
            email=email.strip().lower(),
            username=username,
            password_hash=self.hash_password(password),
            preferred_platforms=normalize_preferences([], settings.default_preferred_platforms),
        )

    def register(self, email: str, password: str, username: Optional[str] = None) -> User:
        """Validate and create a new account."""
        normalized_email, email_error = validate_email(email)
        errors = [email_error] if email_error else []
        errors.extend(validate_password(password))
        if username is not None:
            errors.extend(validate_username(username))
        if errors:
            raise RegistrationError(errors)

        if self.profiles.get_by_email(normalized_email):
            raise RegistrationError(["An account with this email already exists"], conflict=True)
        if username is not None and self.profiles.username_taken(username):
            raise RegistrationError(["Username already taken"], conflict=True)

        return self.create_user(normalized_email, password, username)
