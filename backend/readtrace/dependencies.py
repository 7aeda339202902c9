"""FastAPI dependencies for authentication and service wiring."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from readtrace.database import get_db
from readtrace.services.auth import AuthService
from readtrace.services.import_service import ImportService
from readtrace.services.profile import ProfileService
from readtrace.services.progress import ProgressService
from readtrace.repositories.series import SeriesRepository
from readtrace.repositories.profile import ProfileRepository
from readtrace.repositories.progress import ProgressRepository
from readtrace.models.user import User

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get the current authenticated user from JWT token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication",
            headers={"WWW-Authenticate": "Bearer"},
        )

    auth = AuthService(db)
    user_id = auth.decode_token(credentials.credentials)

    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = auth.get_user_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def get_series_repository(db: Session = Depends(get_db)) -> SeriesRepository:
    return SeriesRepository(db)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(ProfileRepository(db))


def get_progress_service(db: Session = Depends(get_db)) -> ProgressService:
    return ProgressService(ProgressRepository(db), SeriesRepository(db))


def get_import_service(db: Session = Depends(get_db)) -> ImportService:
    return ImportService(SeriesRepository(db))
