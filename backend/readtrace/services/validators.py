"""Account field validation rules."""
import re
from typing import Optional, List, Tuple

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

DISPOSABLE_EMAIL_DOMAINS = {
    "tempmail.com", "10minutemail.com", "guerrillamail.com",
    "mailinator.com", "trashmail.com", "throwaway.email",
    "maildrop.cc", "getnada.com", "temp-mail.org",
    "sharklasers.com", "guerrillamail.info", "grr.la",
    "guerrillamail.biz", "guerrillamail.de", "spam4.me",
}

COMMON_PASSWORDS = {
    "password", "123456", "12345678", "qwerty", "abc123",
    "monkey", "1234567", "letmein", "trustno1", "dragon",
    "baseball", "iloveyou", "master", "sunshine", "ashley",
    "bailey", "passw0rd", "shadow", "123123", "654321",
    "superman", "qazwsx", "michael", "football", "welcome",
    "jesus", "ninja", "mustang", "password1", "password123",
    "123456789", "12345678910", "1234567890", "admin", "root",
    "test", "guest", "user", "demo", "sample",
}

PASSWORD_MIN_LENGTH = 8
SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,30}$")
RESERVED_USERNAMES = {
    "admin", "administrator", "root", "system", "support",
    "readtrace", "api", "null", "undefined", "me",
}

DISPLAY_NAME_MAX_LENGTH = 50
BIO_MAX_LENGTH = 500


def validate_email(email: str) -> Tuple[Optional[str], Optional[str]]:
    """Return (normalized email, None) or (None, error message)."""
    trimmed = (email or "").strip()

    if not trimmed:
        return None, "Email is required"

    if len(trimmed) > 255:
        return None, "Email is too long (maximum 255 characters)"

    if not EMAIL_PATTERN.match(trimmed):
        return None, "Please enter a valid email address"

    normalized = trimmed.lower()
    domain = normalized.split("@", 1)[1]

    if domain in DISPOSABLE_EMAIL_DOMAINS:
        return None, "Disposable email addresses are not allowed"

    if ".." in normalized:
        return None, "Email contains invalid consecutive dots"

    return normalized, None


def validate_password(password: str) -> List[str]:
    """Password rule violations; empty when acceptable."""
    errors = []

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one number")
    if not SPECIAL_CHARACTERS.search(password):
        errors.append("Password must contain at least one special character")
    if password.lower() in COMMON_PASSWORDS:
        errors.append("This password is too common. Please choose a different one")

    return errors


def validate_username(username: str) -> List[str]:
    errors = []
    if not USERNAME_PATTERN.match(username or ""):
        errors.append("Username must be 3-30 characters of letters, numbers or underscores")
    elif username.lower() in RESERVED_USERNAMES:
        errors.append("This username is reserved")
    return errors


def validate_profile_fields(
    username: Optional[str] = None,
    display_name: Optional[str] = None,
    bio: Optional[str] = None,
) -> List[str]:
    """Violations for the supplied profile fields; None means "not being changed"."""
    errors = []
    if username is not None:
        errors.extend(validate_username(username))
    if display_name is not None and len(display_name.strip()) > DISPLAY_NAME_MAX_LENGTH:
        errors.append(f"Display name must be at most {DISPLAY_NAME_MAX_LENGTH} characters")
    if bio is not None and len(bio) > BIO_MAX_LENGTH:
        errors.append(f"Bio must be at most {BIO_MAX_LENGTH} characters")
    return errors
