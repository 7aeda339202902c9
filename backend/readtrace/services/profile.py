"""Profile and preference management."""
import logging
from typing import Optional, List

from readtrace.config import settings
from readtrace.models.user import User
from readtrace.repositories.profile import ProfileRepository
from readtrace.services.auth import pwd_context
from readtrace.services.platforms import normalize_preferences
from readtrace.services.validators import validate_profile_fields, validate_password

logger = logging.getLogger(__name__)


class ProfileValidationError(Exception):
    """Profile update rejected."""
    def __init__(self, errors: List[str], conflict: bool = False):
        self.errors = errors
        self.conflict = conflict
        super().__init__("; ".join(errors))


class ProfileService:
    """Reads and updates a user's profile, password and platform preferences."""

    def __init__(self, profiles: ProfileRepository):
        self.profiles = profiles

    def update_profile(
        self,
        user: User,
        username: Optional[str] = None,
        display_name: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> User:
        """Apply the supplied fields; fields left as None are unchanged."""
        errors = validate_profile_fields(username, display_name, bio)
        if errors:
            raise ProfileValidationError(errors)

        if username is not None and self.profiles.username_taken(username, exclude_user_id=user.id):
            raise ProfileValidationError(["Username already taken"], conflict=True)

        fields = {}
        if username is not None:
            fields["username"] = username
        if display_name is not None:
            fields["display_name"] = display_name.strip() or None
        if bio is not None:
            fields["bio"] = bio

        if not fields:
            return user
        return self.profiles.update(user, **fields)

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not pwd_context.verify(current_password, user.password_hash):
            raise ProfileValidationError(["Current password is incorrect"])

        errors = validate_password(new_password)
        if current_password == new_password:
            errors.append("New password must be different from the current password")
        if errors:
            raise ProfileValidationError(errors)

        self.profiles.update(user, password_hash=pwd_context.hash(new_password))
        logger.info(f"Password changed for user {user.id}")

    def get_preferred_platforms(self, user: User) -> List[str]:
        return list(user.preferred_platforms or settings.default_preferred_platforms)

    def save_preferred_platforms(self, user: User, platforms: List[str]) -> User:
        """Store the normalized preference list (unknown ids dropped, defaults when empty)."""
        normalized = normalize_preferences(platforms, settings.default_preferred_platforms)
        return self.profiles.set_preferred_platforms(user, normalized)

    def remember_platform_choice(self, user: User, platform: str) -> User:
        """Record a manual platform pick, used as a resume fallback."""
        if user.last_selected_platform == platform:
            return user
        return self.profiles.set_last_selected_platform(user, platform)
