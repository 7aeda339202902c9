"""Reading progress repository."""
from typing import Optional, List
from sqlalchemy.orm import Session

from readtrace.models.reading_progress import ReadingProgress


class ProgressRepository:
    """Access to the ``reading_progress`` table."""

    def __init__(self, db: Session):
        self.db = db

    def list_for_series(self, user_id: int, series_id: int) -> List[ReadingProgress]:
        return self.db.query(ReadingProgress).filter(
            ReadingProgress.user_id == user_id,
            ReadingProgress.series_id == series_id,
        ).order_by(ReadingProgress.updated_at.desc()).all()

    def get(self, user_id: int, series_id: int, platform: str) -> Optional[ReadingProgress]:
        return self.db.query(ReadingProgress).filter(
            ReadingProgress.user_id == user_id,
            ReadingProgress.series_id == series_id,
            ReadingProgress.platform == platform,
        ).first()

    def upsert(self, user_id: int, series_id: int, progress) -> ReadingProgress:
        """Insert or overwrite the row for ``progress.platform``."""
        record = self.get(user_id, series_id, progress.platform)
        if record is None:
            record = ReadingProgress(
                user_id=user_id,
                series_id=series_id,
                platform=progress.platform,
            )
            self.db.add(record)

        record.chapter_number = progress.current_chapter
        record.total_chapters = progress.total_chapters
        record.scroll_position = progress.scroll_position
        record.resume_url = progress.resume_url
        record.updated_at = progress.updated_at

        self.db.commit()
        self.db.refresh(record)
        return record
