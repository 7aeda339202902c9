"""User model."""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from readtrace.database import Base


class User(Base):
    """Registered reader and their profile."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    username = Column(String(30), unique=True, index=True)
    display_name = Column(String(50))
    bio = Column(String(500))
    password_hash = Column(String(255), nullable=False)
    preferred_platforms = Column(JSON, nullable=False, default=list)  # ["mangadex", "webtoon"]
    preferred_platforms_updated_at = Column(DateTime(timezone=True))
    last_selected_platform = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    series = relationship("UserSeries", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.email}>"
