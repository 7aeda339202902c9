"""Business logic services."""
from readtrace.services.auth import AuthService
from readtrace.services.import_service import ImportService
from readtrace.services.profile import ProfileService
from readtrace.services.progress import ProgressService

__all__ = [
    "AuthService",
    "ImportService",
    "ProfileService",
    "ProgressService",
]
