"""Series repository."""
from datetime import datetime
from typing import Optional, List, Tuple
from sqlalchemy.orm import Session

from readtrace.models.series import UserSeries
from readtrace.models.reading_progress import ReadingProgress


class SeriesRepository:
    """Access to the ``user_series`` table."""

    def __init__(self, db: Session):
        self.db = db

    def get_for_user(self, user_id: int, series_id: int) -> Optional[UserSeries]:
        return self.db.query(UserSeries).filter(
            UserSeries.id == series_id,
            UserSeries.user_id == user_id,
        ).first()

    def _user_query(self, user_id: int, statuses: Optional[List[str]] = None):
        query = self.db.query(UserSeries).filter(UserSeries.user_id == user_id)
        if statuses:
            query = query.filter(UserSeries.status.in_(statuses))
        # Most recently read first, never-read last
        return query.order_by(
            UserSeries.last_read_at.is_(None),
            UserSeries.last_read_at.desc(),
            UserSeries.id.desc(),
        )

    def list_for_user(self, user_id: int, statuses: Optional[List[str]] = None) -> List[UserSeries]:
        return self._user_query(user_id, statuses).all()

    def list_page(
        self,
        user_id: int,
        offset: int = 0,
        limit: int = 20,
        statuses: Optional[List[str]] = None,
    ) -> Tuple[List[UserSeries], int]:
        query = self._user_query(user_id, statuses)
        total = query.count()
        return query.offset(offset).limit(limit).all(), total

    def add(
        self,
        user_id: int,
        title: str,
        normalized_title: str,
        platform: str,
        source_url: Optional[str] = None,
        import_id: Optional[str] = None,
        current_chapter: Optional[float] = None,
        last_read_at: Optional[datetime] = None,
    ) -> UserSeries:
        """Insert a series; raises IntegrityError when the title is already tracked."""
        series = UserSeries(
            user_id=user_id,
            title=title,
            normalized_title=normalized_title,
            platform=platform,
            source_url=source_url,
            import_id=import_id,
            current_chapter=current_chapter or 0,
            last_read_at=last_read_at,
        )
        self.db.add(series)
        self.db.flush()

        if current_chapter:
            self.db.add(ReadingProgress(
                user_id=user_id,
                series_id=series.id,
                platform=platform,
                chapter_number=current_chapter,
                resume_url=source_url,
                updated_at=last_read_at or datetime.utcnow(),
            ))

        self.db.commit()
        self.db.refresh(series)
        return series

    def update_reading_state(
        self,
        series: UserSeries,
        current_chapter: float,
        total_chapters: Optional[int],
        last_read_at: datetime,
    ) -> UserSeries:
        series.current_chapter = current_chapter
        if total_chapters is not None:
            series.total_chapters = total_chapters
        series.last_read_at = last_read_at
        self.db.commit()
        self.db.refresh(series)
        return series

    def rollback(self) -> None:
        self.db.rollback()
