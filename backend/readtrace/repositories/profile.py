"""Profile repository."""
from datetime import datetime
from typing import Optional, List
from sqlalchemy import func
from sqlalchemy.orm import Session

from readtrace.models.user import User


class ProfileRepository:
    """Access to profile and preference columns of the ``users`` table."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def username_taken(self, username: str, exclude_user_id: Optional[int] = None) -> bool:
        """Case-insensitive username check."""
        query = self.db.query(User).filter(func.lower(User.username) == username.lower())
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        return query.first() is not None

    def create(
        self,
        email: str,
        password_hash: str,
        preferred_platforms: List[str],
        username: Optional[str] = None,
    ) -> User:
        user = User(
            email=email,
            username=username,
            password_hash=password_hash,
            preferred_platforms=preferred_platforms,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: User, **fields) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    def set_preferred_platforms(self, user: User, platforms: List[str]) -> User:
        return self.update(
            user,
            preferred_platforms=platforms,
            preferred_platforms_updated_at=datetime.utcnow(),
        )

    def set_last_selected_platform(self, user: User, platform: str) -> User:
        return self.update(user, last_selected_platform=platform)
